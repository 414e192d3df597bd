"""HTTP surface for Jive callbacks."""

from jive_sdk.api.routes import create_app, router

__all__ = ["create_app", "router"]

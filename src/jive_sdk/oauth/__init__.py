"""OAuth token exchange and refresh-and-retry."""

from jive_sdk.oauth.client import JiveOAuthClient
from jive_sdk.oauth.handler import OAuthHandler, is_auth_failure
from jive_sdk.oauth.refresher import OperationContext, TokenRefresher

__all__ = [
    "JiveOAuthClient",
    "OAuthHandler",
    "OperationContext",
    "TokenRefresher",
    "is_auth_failure",
]

"""Exception types raised by the SDK.

Every public coroutine either returns a domain value or raises one of these.
Remote payloads are kept on the exception for diagnostics.
"""

from __future__ import annotations

from typing import Any


class JiveSDKError(Exception):
    """Base class for SDK errors."""


class InvalidInputError(JiveSDKError, ValueError):
    """A public entry point received malformed input."""


class CommunityNotFoundError(JiveSDKError, LookupError):
    """No community record matched a lookup."""


class RemoteCallError(JiveSDKError):
    """A call to the Jive platform failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, entity: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.entity = entity


class TokenRefreshError(RemoteCallError):
    """A refresh-token exchange did not produce a new access token."""


class StaleCredentialsError(JiveSDKError):
    """The community behind an authenticated request is no longer stored."""


class RegistrationError(JiveSDKError):
    """An add-on registration request could not be processed."""


class SignatureValidationError(RegistrationError):
    """A registration request failed signature validation."""


class ConfigurationError(JiveSDKError):
    """The SDK was used without a component it needs, e.g. tile services."""

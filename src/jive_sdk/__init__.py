"""Jive add-on SDK: community registration, OAuth token lifecycle and tile events."""

from jive_sdk.community.models import Community, OAuthTokens
from jive_sdk.config import Settings, get_settings
from jive_sdk.errors import (
    CommunityNotFoundError,
    ConfigurationError,
    InvalidInputError,
    JiveSDKError,
    RegistrationError,
    RemoteCallError,
    SignatureValidationError,
    StaleCredentialsError,
    TokenRefreshError,
)
from jive_sdk.sdk import JiveSDK

__all__ = [
    "Community",
    "CommunityNotFoundError",
    "ConfigurationError",
    "InvalidInputError",
    "JiveSDK",
    "JiveSDKError",
    "OAuthTokens",
    "RegistrationError",
    "RemoteCallError",
    "Settings",
    "SignatureValidationError",
    "StaleCredentialsError",
    "TokenRefreshError",
    "get_settings",
]

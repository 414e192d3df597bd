"""Community data models.

Created: 2026-02-11

These models define the records persisted for each registered Jive community:
- Community (one per jiveUrl, stored in the "community" collection)
- OAuthTokens (the token bundle embedded in a community)

Design notes:
- Dataclasses with to_dict()/from_dict() for persistence
- Persisted keys keep the platform's camelCase names so records stay
  compatible with criteria like {"jiveUrl": ...}
- Unknown keys are carried in ``extra`` and written back untouched
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlsplit

from jive_sdk.errors import InvalidInputError

COLLECTION = "community"
REGISTRATION_VERSION = "post-samurai"


def parse_jive_community(jive_url: str) -> str:
    """Derive the community name from its URL.

    ``https://www.example.com/community`` -> ``example.com/community``
    """
    parts = urlsplit(jive_url)
    try:
        port = parts.port
    except ValueError as e:
        raise InvalidInputError(f"Cannot parse community from URL: {jive_url!r}") from e
    if not parts.hostname:
        raise InvalidInputError(f"Cannot parse community from URL: {jive_url!r}")

    # hostname drops userinfo and is already lowercased
    name = parts.hostname
    if port is not None:
        name += f":{port}"
    name += parts.path.rstrip("/")
    if name.startswith("www."):
        name = name[len("www.") :]
    return name


_TOKEN_KEYS = {
    "access_token": "access_token",
    "refresh_token": "refresh_token",
    "token_type": "token_type",
    "expires_in": "expires_in",
    "scope": "scope",
    "code": "code",
    "jive_signature": "jiveSignature",
}


@dataclass
class OAuthTokens:
    """OAuth 2.0 token bundle for a community."""

    access_token: str | None = None
    refresh_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    code: str | None = None  # Authorization code from the registration
    jive_signature: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        for attr, key in _TOKEN_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> OAuthTokens:
        data = dict(data or {})
        values = {attr: data.pop(key, None) for attr, key in _TOKEN_KEYS.items()}
        return cls(**values, extra=data)

    def merged(self, entity: dict[str, Any] | None) -> OAuthTokens:
        """Return a copy updated with every field ``entity`` supplies.

        Fields missing (or null) in ``entity`` keep their current value.
        """
        incoming = OAuthTokens.from_dict(entity)
        updates = {
            attr: getattr(incoming, attr)
            for attr in _TOKEN_KEYS
            if getattr(incoming, attr) is not None
        }
        return replace(self, **updates, extra={**self.extra, **incoming.extra})


_COMMUNITY_KEYS = {
    "jive_url": "jiveUrl",
    "jive_community": "jiveCommunity",
    "tenant_id": "tenantId",
    "client_id": "clientId",
    "client_secret": "clientSecret",
    "version": "version",
}


@dataclass
class Community:
    """A registered Jive community (tenant)."""

    jive_url: str | None = None
    jive_community: str | None = None
    tenant_id: str | None = None  # Durable, global ID
    client_id: str | None = None
    client_secret: str | None = None
    version: str | None = None
    oauth: OAuthTokens | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        for attr, key in _COMMUNITY_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        if self.oauth is not None:
            data["oauth"] = self.oauth.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Community:
        data = dict(data)
        values = {attr: data.pop(key, None) for attr, key in _COMMUNITY_KEYS.items()}
        oauth = data.pop("oauth", None)
        return cls(
            **values,
            oauth=OAuthTokens.from_dict(oauth) if oauth else None,
            extra=data,
        )

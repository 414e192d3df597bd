"""Add-on registration: signature validation and community persistence.

When a Jive community installs (or re-authorizes) an add-on it POSTs a
registration block. Processing runs these stages in order:

1. validate   - confirm the block came from Jive (skipped in development mode)
2. exchange   - trade the authorization ``code`` for tokens, if one was sent
3. persist    - create or update the community record
4. emit       - fire registeredJiveInstanceSuccess / registeredJiveInstanceFailed

Created: 2026-02-12
"""

from __future__ import annotations

import copy
import hashlib
import logging
from collections.abc import Mapping
from typing import Any

from jive_sdk.community.models import REGISTRATION_VERSION, Community, OAuthTokens
from jive_sdk.community.service import CommunityService
from jive_sdk.config import Settings, get_settings
from jive_sdk.errors import InvalidInputError, JiveSDKError, SignatureValidationError
from jive_sdk.events.names import GlobalEvents
from jive_sdk.events.registry import EventRegistry
from jive_sdk.http import HttpTransport
from jive_sdk.oauth.client import JiveOAuthClient

logger = logging.getLogger(__name__)

MAC_HEADER = "X-Jive-MAC"


def _render(value: Any) -> str:
    """Render a value the way the platform's canonical form does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        # Array elements join with commas; null elements render empty
        return ",".join("" if item is None else _render(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def canonicalize_registration(registration: Mapping[str, Any]) -> str:
    """Build the buffer the signature service recomputes the MAC over.

    The signature is dropped, the client secret replaced by its SHA-256 hex
    digest and the remaining keys written as ``key:value`` lines in sorted
    order, so identical blocks always produce identical bytes.
    """
    block = copy.deepcopy(dict(registration))
    block.pop("jiveSignature", None)
    secret = block.get("clientSecret")
    if secret is not None:
        block["clientSecret"] = hashlib.sha256(str(secret).encode("utf-8")).hexdigest()
    return "".join(f"{key}:{_render(block[key])}\n" for key in sorted(block))


class RegistrationValidator:
    """Checks a registration block against Jive's signature service."""

    def __init__(self, transport: HttpTransport, settings: Settings | None = None):
        self.transport = transport
        self.settings = settings or get_settings()

    async def validate(self, registration: Mapping[str, Any]) -> bool:
        """Return True when the block is authentic.

        Raises:
            SignatureValidationError: Required signature fields are missing.
            RemoteCallError: The signature service rejected the block or was unreachable.
        """
        if self.settings.development:
            logger.warning(
                "Development mode is on. Accepting extension registration request "
                "regardless of source!"
            )
            return True

        required = ("jiveSignature", "jiveSignatureURL", "clientSecret")
        missing = [k for k in required if not registration.get(k)]
        if missing:
            raise SignatureValidationError(f"Registration block is missing {', '.join(missing)}")

        buffer = canonicalize_registration(registration)
        signature_url = registration["jiveSignatureURL"]
        logger.debug("Shipping validation request to signature service: %s", signature_url)

        await self.transport.build_request(
            signature_url,
            "POST",
            buffer,
            {MAC_HEADER: registration["jiveSignature"]},
        )
        return True


class RegistrationProcessor:
    """Processes incoming community add-on registration requests."""

    def __init__(
        self,
        validator: RegistrationValidator,
        communities: CommunityService,
        oauth_client: JiveOAuthClient,
        events: EventRegistry,
        settings: Settings | None = None,
    ):
        self.validator = validator
        self.communities = communities
        self.oauth_client = oauth_client
        self.events = events
        self.settings = settings or get_settings()

    async def register(self, registration: Mapping[str, Any]) -> Community:
        """Validate a registration block and save the community it describes.

        Args:
            registration: The block posted by Jive (jiveUrl, tenantId, clientId,
                clientSecret, jiveSignature, jiveSignatureURL, optional code/scope).

        Returns:
            The saved community.
        """
        if not isinstance(registration, Mapping):
            raise InvalidInputError("Registration must be an object.")
        if not registration.get("jiveUrl"):
            raise InvalidInputError("Registration is missing jiveUrl.")

        try:
            await self.validator.validate(registration)
        except JiveSDKError as e:
            logger.debug("Unsuccessful registration request: %s", e)
            await self.events.emit(GlobalEvents.CLIENT_APP_REGISTRATION_FAILED, e)
            raise SignatureValidationError(f"Failed jive signature validation: {e}") from e

        logger.debug("Successful registration request, proceeding.")

        jive_url = registration["jiveUrl"]
        code = registration.get("code")
        client_id = registration.get("clientId") or self.settings.client_id
        client_secret = registration.get("clientSecret") or self.settings.client_secret

        token_entity = None
        if code:
            try:
                response = await self.oauth_client.request_access_token(
                    jive_url,
                    client_id,
                    client_secret,
                    code,
                    scope=registration.get("scope"),
                    tenant_id=registration.get("tenantId"),
                )
            except JiveSDKError:
                await self.events.emit(
                    GlobalEvents.CLIENT_APP_REGISTRATION_FAILED, copy.deepcopy(dict(registration))
                )
                raise
            token_entity = response.entity or {}

        community = await self.communities.find_by_jive_url(jive_url) or Community()
        community.jive_url = jive_url
        community.version = REGISTRATION_VERSION
        community.tenant_id = registration.get("tenantId") or community.tenant_id
        community.client_id = client_id or community.client_id
        community.client_secret = client_secret or community.client_secret

        if token_entity is not None:
            oauth = (community.oauth or OAuthTokens()).merged(token_entity)
            oauth.code = code
            oauth.jive_signature = registration.get("jiveSignature") or oauth.jive_signature
            community.oauth = oauth

        try:
            await self.communities.save(community)
        except Exception:
            logger.error("Could not save community %s", jive_url, exc_info=True)
            await self.events.emit(GlobalEvents.CLIENT_APP_REGISTRATION_FAILED, community)
            raise

        logger.info("Registered community %s (tenant %s)", jive_url, community.tenant_id)
        await self.events.emit(GlobalEvents.CLIENT_APP_REGISTRATION_SUCCESS, community)
        return community

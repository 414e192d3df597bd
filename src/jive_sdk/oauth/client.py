# Jive OAuth client - authorization-code and refresh-token exchanges.
# Created: 2026-02-11
#
# Every call to a community's /oauth2/token endpoint goes through this class.

from __future__ import annotations

import logging

from jive_sdk.errors import InvalidInputError
from jive_sdk.http import HttpTransport, Response

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth2/token"


def token_url(jive_url: str) -> str:
    return jive_url.rstrip("/") + TOKEN_PATH


class JiveOAuthClient:
    """Talks to the token endpoint of a Jive community.

    The community authenticates the add-on with HTTP basic auth
    (client id / client secret) and returns the token entity as JSON.
    """

    def __init__(self, transport: HttpTransport):
        self.transport = transport

    async def _post_token(
        self, jive_url: str | None, client_id: str | None, client_secret: str | None, form: dict
    ) -> Response:
        if not jive_url:
            raise InvalidInputError("jiveUrl is required for a token exchange")
        if not client_id or not client_secret:
            raise InvalidInputError(f"Client credentials are missing for {jive_url}")

        form = {k: v for k, v in form.items() if v is not None}
        form["client_id"] = client_id
        return await self.transport.build_request(
            token_url(jive_url),
            "POST",
            headers={"Accept": "application/json"},
            request_options={"form": form, "auth": (client_id, client_secret)},
        )

    async def request_access_token(
        self,
        jive_url: str | None,
        client_id: str | None,
        client_secret: str | None,
        code: str,
        scope: str | None = None,
        tenant_id: str | None = None,
    ) -> Response:
        """Exchange an authorization code for an access/refresh token pair.

        Raises:
            RemoteCallError: The community rejected the code or was unreachable.
        """
        response = await self._post_token(
            jive_url,
            client_id,
            client_secret,
            {"grant_type": "authorization_code", "code": code, "scope": scope},
        )
        logger.info("Exchanged authorization code for %s (tenant %s)", jive_url, tenant_id)
        return response

    async def refresh_access_token(
        self,
        jive_url: str | None,
        client_id: str | None,
        client_secret: str | None,
        refresh_token: str | None,
    ) -> Response:
        """Exchange a refresh token for a new access token."""
        if not refresh_token:
            raise InvalidInputError(f"No refresh token available for {jive_url}")
        response = await self._post_token(
            jive_url,
            client_id,
            client_secret,
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        logger.info("Refreshed access token for %s", jive_url)
        return response

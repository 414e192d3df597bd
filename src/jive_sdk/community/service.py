# Community service - persistence lookups and authenticated requests to a community.
# Created: 2026-02-11

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from jive_sdk.community.models import COLLECTION, Community, OAuthTokens, parse_jive_community
from jive_sdk.errors import CommunityNotFoundError, InvalidInputError, StaleCredentialsError
from jive_sdk.http import HttpTransport, Response
from jive_sdk.oauth.client import JiveOAuthClient
from jive_sdk.oauth.refresher import OperationContext, TokenPersistence
from jive_sdk.persistence.protocol import PersistenceProtocol

if TYPE_CHECKING:
    from jive_sdk.oauth.handler import OAuthHandler

logger = logging.getLogger(__name__)


def build_url(jive_url: str, path: str) -> str:
    """Join a community base URL and a relative path with exactly one slash."""
    if not path.startswith("/"):
        path = "/" + path
    if jive_url.endswith("/"):
        jive_url = jive_url[:-1]
    return jive_url + path


class CommunityService:
    """API for interacting with registered Jive communities."""

    def __init__(
        self,
        persistence: PersistenceProtocol,
        transport: HttpTransport,
        oauth_client: JiveOAuthClient,
        oauth_handler: OAuthHandler,
    ):
        self.persistence = persistence
        self.transport = transport
        self.oauth_client = oauth_client
        self.oauth_handler = oauth_handler

    # =========================================================================
    # Persistence
    # =========================================================================

    async def save(self, community: Community) -> Community:
        """Save a community, deriving ``jive_community`` from its URL if missing.

        Raises:
            InvalidInputError: The community has no jive_url.
        """
        if not community.jive_url:
            raise InvalidInputError("Invalid community object, must specify a jiveUrl property.")
        if not community.jive_community:
            community.jive_community = parse_jive_community(community.jive_url)

        await self.persistence.save(COLLECTION, community.jive_url, community.to_dict())
        return community

    async def _find_one(self, criteria: dict[str, Any]) -> Community | None:
        found = await self.persistence.find(COLLECTION, criteria)
        if not found:
            return None
        return Community.from_dict(found[0])

    async def find_by_jive_url(self, jive_url: str) -> Community | None:
        return await self._find_one({"jiveUrl": jive_url})

    async def find_by_community(self, jive_community: str) -> Community | None:
        return await self._find_one({"jiveCommunity": jive_community})

    async def find_by_tenant_id(self, tenant_id: str) -> Community | None:
        return await self._find_one({"tenantId": tenant_id})

    # =========================================================================
    # OAuth
    # =========================================================================

    async def request_access_token(self, jive_url: str, code: str) -> Response:
        """Exchange an authorization code using the stored community's credentials.

        Raises:
            CommunityNotFoundError: No community is registered for ``jive_url``.
        """
        community = await self.find_by_jive_url(jive_url)
        if community is None:
            raise CommunityNotFoundError(f"No community found by the url: {jive_url}")
        return await self.oauth_client.request_access_token(
            jive_url, community.client_id, community.client_secret, code
        )

    async def do_request(
        self,
        community: Community | Mapping[str, Any],
        *,
        path: str | None = None,
        url: str | None = None,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        oauth: OAuthTokens | Mapping[str, Any] | None = None,
        token_persistence: TokenPersistence | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> Response:
        """Make a request to a community, refreshing the access token on auth failure.

        Args:
            community: The target community (record or persisted dict).
            path: Path relative to the community's jive_url; ignored when ``url`` is set.
            url: Full request URL.
            method: HTTP method.
            body: Request body.
            headers: Extra headers.
            oauth: Tokens to use instead of the community's own.
            token_persistence: Called with (new token entity, community) after a
                refresh. Defaults to saving the tokens onto the community, unless
                ``oauth`` was passed explicitly.
            request_options: Passed through to the transport.

        Returns:
            The successful response.
        """
        if community is None:
            raise InvalidInputError("Community is required.")
        if isinstance(community, Mapping):
            community = Community.from_dict(dict(community))
        elif not isinstance(community, Community):
            raise InvalidInputError("Community must be an object.")

        if not url:
            if path is None:
                raise InvalidInputError("Either url or path is required.")
            if not community.jive_url:
                raise InvalidInputError("Community has no jiveUrl to resolve path against.")
            url = build_url(community.jive_url, path)

        headers = dict(headers or {})

        if isinstance(oauth, Mapping):
            oauth = OAuthTokens.from_dict(dict(oauth))
        tokens = oauth or community.oauth
        if tokens is None or not tokens.access_token:
            logger.info("No oauth credentials found.  Continuing without them.")
            return await self.transport.build_request(url, method, body, headers, request_options)

        if token_persistence is None and oauth is None:
            token_persistence = self._store_refreshed_tokens

        headers["Authorization"] = f"Bearer {tokens.access_token}"

        async def send(context: OperationContext, current: OAuthTokens) -> Response:
            target = context.community
            name = target.jive_community or parse_jive_community(target.jive_url)
            if await self.find_by_community(name) is None:
                raise StaleCredentialsError(f"Community {name} is no longer registered")
            headers["Authorization"] = f"Bearer {current.access_token}"
            return await self.transport.build_request(url, method, body, headers, request_options)

        return await self.oauth_handler.do_operation(
            send,
            OperationContext(community=community, token_persistence=token_persistence),
            OAuthTokens(access_token=tokens.access_token, refresh_token=tokens.refresh_token),
        )

    async def _store_refreshed_tokens(self, entity: dict[str, Any], community: Community) -> None:
        community.oauth = (community.oauth or OAuthTokens()).merged(entity)
        await self.save(community)

# Token refresher - refresh-token exchange for a community's OAuth bundle.
# Created: 2026-02-11

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from jive_sdk.errors import JiveSDKError, RemoteCallError, TokenRefreshError
from jive_sdk.oauth.client import JiveOAuthClient

if TYPE_CHECKING:
    from jive_sdk.community.models import Community, OAuthTokens

logger = logging.getLogger(__name__)

# Called with (new token entity, community); may return an awaitable
TokenPersistence = Callable[[dict[str, Any], "Community"], Awaitable[Any] | Any]


@dataclass
class OperationContext:
    """State for a single OAuthHandler.do_operation call."""

    community: Community | None
    token_persistence: TokenPersistence | None = None
    payload: dict[str, Any] = field(default_factory=dict)


class TokenRefresher:
    """Obtains a new access token with the community's refresh token."""

    def __init__(self, oauth_client: JiveOAuthClient):
        self.oauth_client = oauth_client

    async def __call__(self, context: OperationContext, tokens: OAuthTokens) -> dict[str, Any]:
        return await self.refresh(context, tokens)

    async def refresh(self, context: OperationContext, tokens: OAuthTokens) -> dict[str, Any]:
        """Refresh ``tokens`` and hand the result to the persistence callback.

        Returns:
            The token entity from the community's token endpoint.

        Raises:
            TokenRefreshError: No community, or the exchange failed.
        """
        community = context.community
        if community is None:
            raise TokenRefreshError("Cannot refresh access token without a community")

        try:
            response = await self.oauth_client.refresh_access_token(
                community.jive_url,
                community.client_id,
                community.client_secret,
                tokens.refresh_token,
            )
        except RemoteCallError as e:
            logger.error("Error refreshing access token for %s: %s", community.jive_url, e)
            raise TokenRefreshError(
                f"Access token refresh failed for {community.jive_url}",
                status_code=e.status_code,
                entity=e.entity,
            ) from e
        except JiveSDKError as e:
            logger.error("Error refreshing access token for %s: %s", community.jive_url, e)
            raise TokenRefreshError(
                f"Access token refresh failed for {community.jive_url}: {e}"
            ) from e

        if not response.ok:
            logger.error(
                "Error refreshing access token for %s: status %s",
                community.jive_url,
                response.status_code,
            )
            raise TokenRefreshError(
                f"Access token refresh failed for {community.jive_url}",
                status_code=response.status_code,
                entity=response.entity,
            )

        entity = response.entity or {}
        if context.token_persistence is not None:
            try:
                result = context.token_persistence(entity, community)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                # The new token is still usable for this operation
                logger.warning(
                    "Could not persist refreshed token for %s", community.jive_url, exc_info=True
                )
        return entity

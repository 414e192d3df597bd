# OAuth handler - run an operation, refresh the token on auth failure, retry once.
# Created: 2026-02-11

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from jive_sdk.community.models import OAuthTokens
from jive_sdk.errors import RemoteCallError, StaleCredentialsError
from jive_sdk.oauth.refresher import OperationContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUTH_FAILURE_STATUSES = frozenset({401, 403})

Operation = Callable[[OperationContext, OAuthTokens], Awaitable[T]]
Refresher = Callable[[OperationContext, OAuthTokens], Awaitable[dict[str, Any]]]


def is_auth_failure(exc: BaseException) -> bool:
    """True when ``exc`` means the access token was rejected or unusable."""
    if isinstance(exc, StaleCredentialsError):
        return True
    return isinstance(exc, RemoteCallError) and exc.status_code in AUTH_FAILURE_STATUSES


class OAuthHandler:
    """Refresh-and-retry executor for authenticated operations.

    Usage:
        handler = OAuthHandler(TokenRefresher(oauth_client))
        result = await handler.do_operation(send, context, tokens)

    ``send`` is awaited once with ``tokens``. If it fails with an auth error the
    refresher runs and ``send`` is awaited exactly once more with the new tokens.
    """

    def __init__(self, refresher: Refresher):
        self._refresher = refresher

    async def do_operation(
        self, operation: Operation[T], context: OperationContext, tokens: OAuthTokens
    ) -> T:
        try:
            return await operation(context, tokens)
        except Exception as e:
            if not is_auth_failure(e):
                raise
            logger.info("Operation rejected (%s), refreshing access token", e)

        entity = await self._refresher(context, tokens)
        refreshed = tokens.merged(entity)
        return await operation(context, refreshed)

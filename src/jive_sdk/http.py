# HTTP transport - outbound requests to Jive communities and the signature service.
# Created: 2026-02-11

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from jive_sdk.config import Settings, get_settings
from jive_sdk.errors import RemoteCallError

logger = logging.getLogger(__name__)


@dataclass
class Response:
    """A completed HTTP exchange with a parsed body."""

    status_code: int
    entity: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


def _parse_entity(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return resp.text


class HttpTransport:
    """Thin async wrapper around httpx.

    Non-2xx responses and transport failures raise ``RemoteCallError`` so that
    callers only ever see successful ``Response`` objects.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def build_request(
        self,
        url: str,
        method: str | None = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> Response:
        """Send a request and return its parsed response.

        Args:
            url: Absolute request URL.
            method: HTTP method, GET when omitted.
            body: dict/list bodies are sent as JSON, str/bytes verbatim.
            headers: Extra request headers.
            request_options: Optional ``timeout``, ``params``, ``form`` (urlencoded
                body, overrides ``body``) and ``auth`` (basic auth tuple).

        Returns:
            Response with status code and parsed entity.
        """
        method = (method or "GET").upper()
        opts = request_options or {}
        kwargs: dict[str, Any] = {"headers": dict(headers or {})}

        if opts.get("form") is not None:
            kwargs["data"] = opts["form"]
        elif isinstance(body, (dict, list)):
            kwargs["json"] = body
        elif body is not None:
            kwargs["content"] = body

        if opts.get("params"):
            kwargs["params"] = opts["params"]
        if opts.get("auth"):
            kwargs["auth"] = tuple(opts["auth"])

        timeout = opts.get("timeout", self.settings.http_timeout)
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise RemoteCallError(f"{method} {url} failed: {e}", entity=str(e)) from e

        response = Response(
            status_code=resp.status_code,
            entity=_parse_entity(resp),
            headers=dict(resp.headers),
        )
        if not response.ok:
            raise RemoteCallError(
                f"{method} {url} returned {resp.status_code}",
                status_code=resp.status_code,
                entity=response.entity,
            )
        return response

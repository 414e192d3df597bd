# Tests for http.py
# Created: 2026-02-13

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from jive_sdk.config import Settings
from jive_sdk.errors import RemoteCallError
from jive_sdk.http import HttpTransport, Response


@pytest.fixture
def transport(tmp_path):
    return HttpTransport(Settings(config_dir=tmp_path, http_timeout=5))


def _mock_client(mock_client_cls, **request_kwargs):
    mock_client = AsyncMock()
    mock_client.request = AsyncMock(**request_kwargs)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_client
    return mock_client


class TestResponse:
    def test_ok(self):
        assert Response(200).ok
        assert Response(299).ok
        assert not Response(301).ok
        assert not Response(401).ok


class TestBuildRequest:
    async def test_json_entity(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            client = _mock_client(
                mock_client_cls, return_value=httpx.Response(200, json={"id": "1"})
            )
            resp = await transport.build_request("https://x/api", headers={"A": "b"})

        assert resp.status_code == 200
        assert resp.entity == {"id": "1"}
        client.request.assert_awaited_once_with("GET", "https://x/api", headers={"A": "b"})
        mock_client_cls.assert_called_once_with(timeout=5)

    async def test_text_entity(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, return_value=httpx.Response(200, text="plain"))
            resp = await transport.build_request("https://x/api")
        assert resp.entity == "plain"

    async def test_empty_entity(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, return_value=httpx.Response(204))
            resp = await transport.build_request("https://x/api", "POST", "k:v\n")
        assert resp.entity is None

    async def test_body_and_options(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            client = _mock_client(mock_client_cls, return_value=httpx.Response(200, json={}))
            await transport.build_request("https://x/a", "post", {"a": 1})
            await transport.build_request("https://x/b", "POST", "raw")
            await transport.build_request(
                "https://x/c",
                "POST",
                request_options={"form": {"g": "1"}, "auth": ["u", "p"], "timeout": 1},
            )

        calls = client.request.call_args_list
        assert calls[0].args == ("POST", "https://x/a")
        assert calls[0].kwargs["json"] == {"a": 1}
        assert calls[1].kwargs["content"] == "raw"
        assert calls[2].kwargs["data"] == {"g": "1"}
        assert calls[2].kwargs["auth"] == ("u", "p")
        assert mock_client_cls.call_args_list[2].kwargs == {"timeout": 1}

    async def test_non_2xx_raises(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(
                mock_client_cls,
                return_value=httpx.Response(401, json={"error": "invalid_token"}),
            )
            with pytest.raises(RemoteCallError) as exc_info:
                await transport.build_request("https://x/api")

        assert exc_info.value.status_code == 401
        assert exc_info.value.entity == {"error": "invalid_token"}

    async def test_transport_error_wrapped(self, transport):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, side_effect=httpx.ConnectError("refused"))
            with pytest.raises(RemoteCallError) as exc_info:
                await transport.build_request("https://x/api")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

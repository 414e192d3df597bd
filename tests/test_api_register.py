"""Tests for the registration HTTP endpoint.

Created: 2026-02-13
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from jive_sdk.api.routes import create_app
from jive_sdk.config import Settings
from jive_sdk.errors import RemoteCallError
from jive_sdk.http import Response
from jive_sdk.persistence.memory import MemoryPersistence
from jive_sdk.sdk import JiveSDK

_BLOCK = {
    "jiveUrl": "https://jive.example.com",
    "tenantId": "tenant-1",
    "clientId": "cid",
    "clientSecret": "csecret",
    "jiveSignature": "sig",
    "jiveSignatureURL": "https://market.example.com/validate",
}


@pytest.fixture
def transport():
    t = MagicMock()
    t.build_request = AsyncMock(return_value=Response(204))
    return t


@pytest.fixture
def sdk(tmp_path, transport):
    return JiveSDK(
        settings=Settings(config_dir=tmp_path, development=False),
        persistence=MemoryPersistence(),
        transport=transport,
    )


@pytest.fixture
def client(sdk):
    return TestClient(create_app(sdk), raise_server_exceptions=False)


class TestRegisterEndpoint:
    def test_success(self, client, sdk):
        resp = client.post("/jive/oauth/register", json=_BLOCK)

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "jiveUrl": "https://jive.example.com",
            "tenantId": "tenant-1",
        }
        assert sdk.persistence._collections["community"]["https://jive.example.com"]

    def test_missing_jive_url(self, client):
        resp = client.post("/jive/oauth/register", json={"tenantId": "t"})
        assert resp.status_code == 400
        assert "jiveUrl" in resp.json()["detail"]

    def test_bad_signature(self, client, transport):
        transport.build_request.side_effect = RemoteCallError("bad mac", 403)
        resp = client.post("/jive/oauth/register", json=_BLOCK)
        assert resp.status_code == 403
        assert "signature" in resp.json()["detail"]

    def test_token_exchange_failure(self, client, transport):
        # Signature check passes, token endpoint rejects the code
        transport.build_request.side_effect = [
            Response(204),
            RemoteCallError("invalid_grant", 400),
        ]
        resp = client.post("/jive/oauth/register", json={**_BLOCK, "code": "expired"})
        assert resp.status_code == 502

    def test_non_object_body(self, client):
        resp = client.post("/jive/oauth/register", json=["x"])
        assert resp.status_code == 422

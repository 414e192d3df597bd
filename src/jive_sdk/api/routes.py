# Registration router - endpoint Jive calls when the add-on is installed.
# Created: 2026-02-13

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, FastAPI, HTTPException, Request
from pydantic import BaseModel

from jive_sdk.errors import InvalidInputError, JiveSDKError, SignatureValidationError
from jive_sdk.sdk import JiveSDK

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registration"])


class RegistrationResponse(BaseModel):
    status: str = "ok"
    jiveUrl: str
    tenantId: str | None = None


def _get_sdk(request: Request) -> JiveSDK:
    return request.app.state.jive_sdk


@router.post("/jive/oauth/register", response_model=RegistrationResponse)
async def register(request: Request, registration: dict[str, Any] = Body(...)):
    """Process a client app registration block posted by a Jive community."""
    sdk = _get_sdk(request)
    try:
        community = await sdk.registration.register(registration)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except SignatureValidationError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except JiveSDKError as e:
        logger.warning("Registration for %s failed: %s", registration.get("jiveUrl"), e)
        raise HTTPException(status_code=502, detail=str(e)) from e

    return RegistrationResponse(jiveUrl=community.jive_url, tenantId=community.tenant_id)


def create_app(sdk: JiveSDK | None = None) -> FastAPI:
    """Build a FastAPI app serving the registration endpoint."""
    app = FastAPI(title="Jive add-on service")
    app.state.jive_sdk = sdk or JiveSDK()
    app.include_router(router)
    return app

"""One-shot admin bootstrap endpoint.

Responses keep the ``{"error": ...}`` / ``{"message": ...}`` bodies the setup
tooling expects instead of FastAPI's ``detail`` envelope.
"""
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
import logging

from ..config import ADMIN_SETUP_KEY
from ..services.admin_setup import ensure_admin
from ..services.backend import BackendClient, BackendError, get_backend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Setup"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

class SetupAdminRequest(BaseModel):
    email: str
    password: str
    setup_key: str = Field(alias="setupKey")

def _json(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)

@router.options("/setup-admin")
def setup_admin_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)

@router.post("/setup-admin")
def setup_admin(request: SetupAdminRequest, backend: BackendClient = Depends(get_backend)):
    if request.setup_key != ADMIN_SETUP_KEY:
        logger.warning("Rejected admin setup for %s: invalid setup key", request.email)
        return _json({"error": "Invalid setup key"}, status_code=403)

    try:
        result = ensure_admin(backend, request.email, request.password)
    except BackendError as e:
        logger.error("Admin setup failed for %s: %s", request.email, e.message)
        return _json({"error": e.message}, status_code=502)
    except Exception as e:
        logger.exception("Unexpected error during admin setup")
        return _json({"error": str(e) or "Unknown error"}, status_code=500)

    if result.created:
        return _json({"message": "Admin user created successfully", "userId": str(result.user_id)})
    return _json({"message": "Admin role ensured for existing user"})

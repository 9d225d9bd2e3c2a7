"""
Edge function handlers for user approval.

These are called out-of-band by the admin UI with the hosting platform's
conventions: raw JSON bodies, {"error": ...} failures and permissive CORS
headers on every response, including preflight.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from supabase import Client
from app.database.supabase_client import get_service_supabase
from app.modules.approvals.schemas import ApproveUserRequest, ApproveWithCredentialsRequest
from app.modules.approvals.service import ApprovalService, error_message
from typing import Callable
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["edge-functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_client_factory() -> Callable[[], Client]:
    """The client is built inside each handler so construction errors keep the {"error"} contract"""
    return get_service_supabase


def _json(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int) -> JSONResponse:
    return _json({"error": message}, status_code=status_code)


async def _read_body(request: Request, model):
    payload = await request.json()
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return model(**payload)


@router.options("/approve-user")
@router.options("/approve-user-with-credentials")
async def preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/approve-user")
async def approve_user(
    request: Request,
    client_factory: Callable[[], Client] = Depends(get_client_factory)
):
    """Approve a row in signup_requests and create its auth user"""
    try:
        body = await _read_body(request, ApproveUserRequest)
        if not body.userId:
            return _error("User ID is required", 400)
        service = ApprovalService(client_factory())
        result = service.approve_signup_request(str(body.userId))
        return _json(result.model_dump(exclude_none=True))
    except HTTPException as e:
        return _error(e.detail, e.status_code)
    except Exception as e:
        logger.error(f"approve-user failed: {error_message(e)}")
        return _error(error_message(e), 500)


@router.post("/approve-user-with-credentials")
async def approve_user_with_credentials(
    request: Request,
    client_factory: Callable[[], Client] = Depends(get_client_factory)
):
    """Create an auth user from credentials sent by the admin UI"""
    try:
        body = await _read_body(request, ApproveWithCredentialsRequest)
        if not body.userId or not body.userEmail or not body.userPassword:
            return _error("User details required", 400)
        service = ApprovalService(client_factory())
        result = service.approve_with_credentials(str(body.userId), body.userEmail, body.userPassword)
        return _json(result.model_dump(exclude_none=True))
    except HTTPException as e:
        return _error(e.detail, e.status_code)
    except Exception as e:
        logger.error(f"approve-user-with-credentials failed: {error_message(e)}")
        return _error(error_message(e), 500)

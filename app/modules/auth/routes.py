from fastapi import APIRouter, Depends, Request
from app.modules.auth.schemas import (
    LoginRequest, SignupRequest, TokenResponse, SignupResponse, MeResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import (
    get_auth_service, get_optional_token, get_current_principal, is_approved_user, is_admin
)
from app.core.rate_limit import limiter, login_rate_limit
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    signup_data: SignupRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Submit a signup request for admin review"""
    return await service.signup(signup_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login as a community member"""
    return await service.login(login_data)


@router.post("/admin/login", response_model=TokenResponse)
@limiter.limit(login_rate_limit)
async def admin_login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login as an admin"""
    return await service.admin_login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: Optional[str] = Depends(get_optional_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and drop the session; succeeds without a token too"""
    if token:
        await service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(principal: Dict = Depends(get_current_principal)):
    """Current principal plus the flags the frontend uses to guard routes"""
    return MeResponse(
        kind=principal["kind"],
        principal=principal["principal"],
        is_authenticated=is_approved_user(principal),
        is_admin_authenticated=is_admin(principal),
    )

import logging
from fastapi import HTTPException
from typing import Dict, Any

from app.database.memory_store import (
    MemoryStore, InvalidCredentialsError, DuplicateEmailError, UserNotFoundError
)
from app.modules.auth.schemas import LoginRequest, SignupRequest, TokenResponse, SignupResponse

logger = logging.getLogger(__name__)

SIGNUP_MESSAGE = "Signup request submitted. An admin will review your account."


class AuthService:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def signup(self, signup_data: SignupRequest) -> SignupResponse:
        """Create a pending signup request"""
        try:
            user = await self.store.signup_user(signup_data.model_dump(mode="json"))
        except DuplicateEmailError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return SignupResponse(
            user_id=user["id"],
            email=user["email"],
            status=user["status"],
            message=SIGNUP_MESSAGE,
        )

    async def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate a community user; only approved accounts get a session"""
        try:
            user, message = await self.store.login_user(login_data.email, login_data.password)
        except InvalidCredentialsError as e:
            logger.info("Failed user login for %s", login_data.email)
            raise HTTPException(status_code=401, detail=str(e))

        if user["status"] != "approved":
            logger.info("Login refused for %s (status: %s)", user["email"], user["status"])
            raise HTTPException(status_code=403, detail=message or "Account status issue")

        token = await self.store.create_session("user", user["id"])
        logger.info("User %s logged in", user["id"])
        return TokenResponse(
            access_token=token,
            principal_id=user["id"],
            email=user["email"],
            kind="user",
        )

    async def admin_login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate an admin"""
        try:
            admin = await self.store.login_admin(login_data.email, login_data.password)
        except InvalidCredentialsError as e:
            logger.warning("Failed admin login for %s", login_data.email)
            raise HTTPException(status_code=401, detail=str(e))

        token = await self.store.create_session("admin", admin["id"])
        logger.info("Admin %s logged in", admin["id"])
        return TokenResponse(
            access_token=token,
            principal_id=admin["id"],
            email=admin["email"],
            kind="admin",
        )

    async def logout(self, token: str) -> bool:
        return await self.store.delete_session(token)

    async def get_principal(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to {"kind", "principal"}; 401 when the session is gone."""
        session = await self.store.get_session(token)
        if session is None:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        kind, principal_id = session
        if kind == "admin":
            admin = await self.store.get_admin(principal_id)
            if admin is None:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            return {"kind": "admin", "principal": admin}
        try:
            user = await self.store.get_user(principal_id)
        except UserNotFoundError:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return {"kind": "user", "principal": user}

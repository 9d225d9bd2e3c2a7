"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.memory_store import MemoryStore, get_store
from app.modules.auth.service import AuthService
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(store: MemoryStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract the session token from the Authorization header"""
    return credentials.credentials


def get_optional_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security)
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_principal(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Resolve the session to {"kind": "user" | "admin", "principal": row}"""
    return await auth_service.get_principal(token)


def is_approved_user(principal: Dict[str, Any]) -> bool:
    return principal["kind"] == "user" and principal["principal"].get("status") == "approved"


def is_admin(principal: Dict[str, Any]) -> bool:
    return principal["kind"] == "admin"


async def get_current_user(
    principal: Dict[str, Any] = Depends(get_current_principal)
) -> dict:
    """Current community user; the account must still be approved"""
    if principal["kind"] != "user":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="A member account is required"
        )
    if not is_approved_user(principal):
        logger.info("Blocked request from user %s (status: %s)",
                    principal["principal"]["id"], principal["principal"].get("status"))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account is not approved"
        )
    return principal["principal"]


async def get_current_admin(
    principal: Dict[str, Any] = Depends(get_current_principal)
) -> dict:
    """Current admin; members get 403"""
    if not is_admin(principal):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return principal["principal"]

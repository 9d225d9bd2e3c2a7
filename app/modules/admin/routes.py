from fastapi import APIRouter, Depends
from app.database.memory_store import MemoryStore, get_store
from app.database.content_store import ContentStore, get_content_store
from app.modules.users.schemas import (
    UserResponse, UserRoleUpdate, BulkUserAction, BulkActionResponse, UserStatus, UserRole
)
from app.modules.users.service import UserService
from app.modules.users.routes import get_user_service
from app.core.dependencies import get_current_admin
from typing import List, Optional, Dict

router = APIRouter(prefix="/admin", tags=["admin"])


# Signup requests
@router.get("/signup-requests", response_model=List[UserResponse])
async def list_signup_requests(
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Pending signup requests, oldest first"""
    return await service.list_pending_users()


@router.post("/signup-requests/bulk-approve", response_model=BulkActionResponse)
async def bulk_approve(
    body: BulkUserAction,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    return await service.bulk_approve(body.user_ids)


@router.post("/signup-requests/bulk-reject", response_model=BulkActionResponse)
async def bulk_reject(
    body: BulkUserAction,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    return await service.bulk_reject(body.user_ids)


@router.post("/signup-requests/{user_id}/approve", response_model=UserResponse)
async def approve_signup_request(
    user_id: str,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Approve a user. Not guarded: any status becomes approved."""
    return await service.approve_user(user_id)


@router.post("/signup-requests/{user_id}/reject", response_model=UserResponse)
async def reject_signup_request(
    user_id: str,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    return await service.reject_user(user_id)


# User management
@router.get("/users", response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
    search: Optional[str] = None,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    return await service.list_users(role=role, status=status, search=search)


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def change_user_role(
    user_id: str,
    body: UserRoleUpdate,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    return await service.set_role(user_id, body.role)


@router.post("/users/{user_id}/toggle-suspension", response_model=UserResponse)
async def toggle_user_suspension(
    user_id: str,
    admin: Dict = Depends(get_current_admin),
    service: UserService = Depends(get_user_service)
):
    """Approved users become suspended; everyone else becomes approved"""
    return await service.toggle_suspension(user_id)


@router.get("/stats")
async def dashboard_stats(
    admin: Dict = Depends(get_current_admin),
    store: MemoryStore = Depends(get_store),
    content_store: ContentStore = Depends(get_content_store)
):
    """Counts for the admin home widgets"""
    stats = await store.stats()
    content = await content_store.counts()
    return {**stats, "content": content}

from fastapi import APIRouter, Depends
from app.database.memory_store import MemoryStore, get_store
from app.modules.users.schemas import UserUpdate, UserResponse, PublicProfileResponse, PasswordChange
from app.modules.users.service import UserService
from app.core.dependencies import get_current_user
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(store: MemoryStore = Depends(get_store)) -> UserService:
    return UserService(store)


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Get the current user's profile"""
    return await service.get_user_by_id(user_data["id"])


@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    user_data_body: UserUpdate,
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update the current user's profile"""
    return await service.update_user(user_data["id"], user_data_body)


@router.post("/me/password", status_code=200)
async def change_my_password(
    body: PasswordChange,
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    await service.change_password(user_data["id"], body)
    return {"message": "Password updated successfully"}


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_user_profile(
    user_id: str,
    user_data: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Community profile of another member"""
    return await service.get_public_profile(user_id)

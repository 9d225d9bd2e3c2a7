from app.database.memory_store import MemoryStore, UserNotFoundError, InvalidCredentialsError
from app.modules.users.schemas import (
    UserUpdate, UserResponse, PublicProfileResponse, PasswordChange,
    BulkActionResponse
)
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user by ID"""
        try:
            user = await self.store.get_user(user_id)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return UserResponse(**user)

    async def get_public_profile(self, user_id: str) -> PublicProfileResponse:
        """Community profile; hidden unless the user is approved"""
        try:
            user = await self.store.get_user(user_id)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        if user["status"] != "approved":
            raise HTTPException(status_code=404, detail="User not found")
        return PublicProfileResponse(**user)

    async def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update only the profile fields that were sent"""
        update_data = user_data.model_dump(mode="json", exclude_unset=True)
        # full_name is required on the row; an explicit null leaves it unchanged
        if update_data.get("full_name", "") is None:
            del update_data["full_name"]
        try:
            user = await self.store.update_profile(user_id, update_data)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        logger.info("Profile updated for user %s (%s)", user_id, ", ".join(sorted(update_data)) or "no fields")
        return UserResponse(**user)

    async def change_password(self, user_id: str, data: PasswordChange) -> None:
        try:
            await self.store.change_password(user_id, data.current_password, data.new_password)
        except InvalidCredentialsError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    async def list_users(
        self,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[UserResponse]:
        """List users, newest first, with optional role/status/search filters"""
        users = await self.store.get_all_users(role=role, status=status, search=search)
        return [UserResponse(**user) for user in users]

    async def list_pending_users(self) -> List[UserResponse]:
        users = await self.store.get_all_pending_users()
        return [UserResponse(**user) for user in users]

    async def approve_user(self, user_id: str) -> UserResponse:
        try:
            user = await self.store.approve_user(user_id)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return UserResponse(**user)

    async def reject_user(self, user_id: str) -> UserResponse:
        try:
            user = await self.store.reject_user(user_id)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return UserResponse(**user)

    async def _bulk(self, user_ids: List[str], action) -> BulkActionResponse:
        processed, failed = [], []
        for user_id in dict.fromkeys(user_ids):
            try:
                await action(user_id)
                processed.append(user_id)
            except UserNotFoundError:
                failed.append(user_id)
        if failed:
            logger.warning("Bulk action skipped unknown users: %s", failed)
        return BulkActionResponse(processed=processed, failed=failed)

    async def bulk_approve(self, user_ids: List[str]) -> BulkActionResponse:
        return await self._bulk(user_ids, self.store.approve_user)

    async def bulk_reject(self, user_ids: List[str]) -> BulkActionResponse:
        return await self._bulk(user_ids, self.store.reject_user)

    async def set_role(self, user_id: str, role: str) -> UserResponse:
        try:
            user = await self.store.set_user_role(user_id, role)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return UserResponse(**user)

    async def toggle_suspension(self, user_id: str) -> UserResponse:
        try:
            user = await self.store.toggle_suspension(user_id)
        except UserNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return UserResponse(**user)

from datetime import datetime, timezone
from fastapi import HTTPException
from supabase import Client
from app.modules.approvals.schemas import ApprovalResponse
import logging

logger = logging.getLogger(__name__)


def error_message(exc: Exception) -> str:
    """Provider errors (postgrest APIError, AuthApiError) carry a .message"""
    return getattr(exc, "message", None) or str(exc)


class ApprovalService:
    """Materializes approved users in Supabase Auth (requires a service_role client)."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _create_auth_user(self, email: str, password: str):
        return self.supabase.auth.admin.create_user({
            "email": email,
            "password": password,
            "email_confirm": True,
        })

    def approve_signup_request(self, user_id: str) -> ApprovalResponse:
        """Mark a signup_requests row approved and create its auth user"""
        try:
            result = self.supabase.table("signup_requests")\
                .select("*")\
                .eq("id", user_id)\
                .single()\
                .execute()
        except Exception as e:
            logger.warning(f"Signup request lookup failed for {user_id}: {error_message(e)}")
            raise HTTPException(status_code=404, detail="User not found")

        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        request_row = result.data

        try:
            self.supabase.table("signup_requests")\
                .update({
                    "status": "approved",
                    "reviewed_at": datetime.now(timezone.utc).isoformat(),
                })\
                .eq("id", user_id)\
                .execute()
            self._create_auth_user(request_row["email"], request_row["password"])
        except Exception as e:
            logger.error(f"Error approving signup request {user_id}: {error_message(e)}")
            raise HTTPException(status_code=500, detail=error_message(e))

        logger.info(f"Signup request {user_id} approved")
        return ApprovalResponse(message="User approved successfully")

    def approve_with_credentials(self, user_id: str, email: str, password: str) -> ApprovalResponse:
        """Create the auth user directly from credentials supplied by the caller"""
        try:
            response = self._create_auth_user(email, password)
        except Exception as e:
            logger.error(f"Error creating auth user for request {user_id}: {error_message(e)}")
            raise HTTPException(status_code=500, detail=error_message(e))

        if not response or not response.user:
            raise HTTPException(status_code=500, detail="Failed to create user")

        logger.info(f"Auth user {response.user.id} created for request {user_id}")
        return ApprovalResponse(
            message="User approved and created successfully",
            userId=response.user.id,
        )

from pydantic import BaseModel
from typing import Optional, Union

# Edge function payloads keep the camelCase keys the admin UI sends.


class ApproveUserRequest(BaseModel):
    userId: Optional[Union[str, int]] = None


class ApproveWithCredentialsRequest(BaseModel):
    userId: Optional[Union[str, int]] = None
    userEmail: Optional[str] = None
    userPassword: Optional[str] = None


class ApprovalResponse(BaseModel):
    success: bool = True
    message: str
    userId: Optional[str] = None

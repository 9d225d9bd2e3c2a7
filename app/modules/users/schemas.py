from pydantic import BaseModel, Field, HttpUrl
from typing import Optional, List, Literal
from datetime import datetime

UserStatus = Literal["pending", "approved", "rejected", "suspended"]
UserRole = Literal["Member", "Ambassador", "Moderator"]


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    age: Optional[int] = Field(default=None, ge=13, le=120)
    gender: Optional[str] = None
    department: Optional[str] = None
    education_level: Optional[str] = None
    github_url: Optional[HttpUrl] = None
    linkedin_url: Optional[HttpUrl] = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    department: Optional[str] = None
    education_level: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    status: UserStatus
    role: UserRole = "Member"
    created_at: datetime
    last_login: Optional[datetime] = None
    activity_score: Optional[int] = None

    class Config:
        from_attributes = True


class PublicProfileResponse(BaseModel):
    id: str
    full_name: str
    department: Optional[str] = None
    education_level: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    role: UserRole = "Member"
    created_at: datetime


class UserRoleUpdate(BaseModel):
    role: UserRole


class BulkUserAction(BaseModel):
    user_ids: List[str] = Field(min_length=1)


class BulkActionResponse(BaseModel):
    processed: List[str]
    failed: List[str]

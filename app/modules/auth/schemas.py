from pydantic import BaseModel, EmailStr, Field, HttpUrl
from typing import Optional, Literal, Union
from datetime import datetime
from app.modules.users.schemas import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=13, le=120)
    gender: Optional[str] = None
    department: Optional[str] = None
    education_level: Optional[str] = None
    github_url: Optional[HttpUrl] = None
    linkedin_url: Optional[HttpUrl] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    principal_id: str
    email: str
    kind: Literal["user", "admin"]


class SignupResponse(BaseModel):
    user_id: str
    email: str
    status: str
    message: str


class AdminResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: Literal["Admin"] = "Admin"
    last_login: Optional[datetime] = None


class MeResponse(BaseModel):
    kind: Literal["user", "admin"]
    principal: Union[UserResponse, AdminResponse]
    is_authenticated: bool
    is_admin_authenticated: bool

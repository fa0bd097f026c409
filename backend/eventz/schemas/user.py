"""
Pydantic schemas for user-related request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-zA-Z0-9_]+$")
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(None, max_length=20)


class UserLogin(BaseModel):
    username: str
    password: str
    role: Literal["user", "admin"] = "user"


class UserResponse(BaseModel):
    id: int
    full_name: str
    email: str
    username: str
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    username: str
    user_id: int
    full_name: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)


class UserSummary(BaseModel):
    id: int
    username: str
    full_name: str
    email: str

    model_config = {"from_attributes": True}


class UserAdminUpdate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class UserProfile(BaseModel):
    username: str
    full_name: str
    email: str
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)

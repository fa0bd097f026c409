"""
Pydantic schemas for the password reset flow.
"""

from typing import Optional
from pydantic import BaseModel, Field


class OtpRequest(BaseModel):
    identifier: str = Field(..., min_length=1, max_length=255)


class OtpResponse(BaseModel):
    success: bool = True
    message: str
    expires_in: int
    # Only populated outside production
    otp: Optional[str] = None


class PasswordReset(BaseModel):
    identifier: str = Field(..., min_length=1, max_length=255)
    otp: str = Field(..., min_length=1, max_length=12)
    new_password: str = Field(..., min_length=8, max_length=128)

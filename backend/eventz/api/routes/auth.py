"""
Authentication and account endpoints: register, login, password change,
profile read/update and the OTP-based password reset.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventz.core.config import get_settings
from eventz.core.exceptions import PermissionDeniedError
from eventz.core.security import Principal, get_current_principal, get_current_user_id
from eventz.db.session import get_db
from eventz.schemas.otp import OtpRequest, OtpResponse, PasswordReset
from eventz.schemas.user import (
    PasswordChange,
    ProfileUpdate,
    Token,
    UserCreate,
    UserLogin,
    UserProfile,
    UserResponse,
)
from eventz.services import otp_service, user_service
from eventz.services.auth_service import authenticate_user, change_password, register_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new user account."""
    user = await register_user(db, user_data)
    return user


@router.post("/login", response_model=Token)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate as a user or admin and receive a JWT access token."""
    return await authenticate_user(db, login_data)


@router.post("/change-password")
async def change_password_endpoint(
    data: PasswordChange,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await change_password(db, user_id, data)
    return {"success": True, "message": "Password updated"}


@router.post("/otp", response_model=OtpResponse)
async def request_otp(data: OtpRequest, db: AsyncSession = Depends(get_db)):
    """
    Issue a password reset code for a username or email.
    The code is echoed back only outside production; delivery is external.
    """
    settings = get_settings()
    token = await otp_service.issue_otp(db, data.identifier)
    return OtpResponse(
        message=f"OTP generated (valid {settings.OTP_TTL_MINUTES} mins)",
        expires_in=settings.OTP_TTL_MINUTES * 60,
        otp=token.otp if settings.otp_exposed else None,
    )


@router.post("/reset-password")
async def reset_password(data: PasswordReset, db: AsyncSession = Depends(get_db)):
    await otp_service.reset_password(db, data.identifier, data.otp, data.new_password)
    return {"success": True, "message": "Password reset successful"}


@router.get("/profile/{username}", response_model=UserProfile)
async def get_profile(username: str, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user_by_username(db, username)


@router.post("/update-profile", response_model=UserProfile)
async def update_profile(
    data: ProfileUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Update name, email and phone. Only the account owner or an admin may edit."""
    if principal.username != data.username and not principal.is_admin:
        raise PermissionDeniedError("Cannot update another user's profile")

    return await user_service.update_profile(
        db,
        data.username,
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
    )

"""
Password reset OTP, keyed by whatever identifier (username or email) the
user typed when requesting it. At most one live token per identifier.
"""

from sqlalchemy import Column, DateTime, String

from eventz.db.base import Base


class PasswordOtp(Base):
    __tablename__ = "password_otps"

    user_input = Column(String(255), primary_key=True)
    otp = Column(String(12), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<PasswordOtp(user_input={self.user_input}, expires_at={self.expires_at})>"

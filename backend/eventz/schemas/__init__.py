from eventz.schemas.user import (
    UserCreate, UserResponse, UserLogin, Token, PasswordChange,
    UserSummary, UserAdminUpdate, UserProfile, ProfileUpdate,
)
from eventz.schemas.event import EventCreate, EventResponse, EventIdResponse
from eventz.schemas.booking import (
    BookingCreate, BookingUpdate, BookingPay,
    BookingResponse, BookingDetailResponse, BookingActionResponse,
)
from eventz.schemas.coupon import CouponCreate, CouponResponse
from eventz.schemas.otp import OtpRequest, OtpResponse, PasswordReset
from eventz.schemas.chat import ChatMessageCreate, ChatMessageResponse
from eventz.schemas.feedback import FeedbackCreate, FeedbackReply, FeedbackResponse

__all__ = [
    "UserCreate", "UserResponse", "UserLogin", "Token", "PasswordChange",
    "UserSummary", "UserAdminUpdate", "UserProfile", "ProfileUpdate",
    "EventCreate", "EventResponse", "EventIdResponse",
    "BookingCreate", "BookingUpdate", "BookingPay",
    "BookingResponse", "BookingDetailResponse", "BookingActionResponse",
    "CouponCreate", "CouponResponse",
    "OtpRequest", "OtpResponse", "PasswordReset",
    "ChatMessageCreate", "ChatMessageResponse",
    "FeedbackCreate", "FeedbackReply", "FeedbackResponse",
]

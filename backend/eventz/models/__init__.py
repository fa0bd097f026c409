from eventz.models.user import User
from eventz.models.event import Event
from eventz.models.booking import Booking, BookingStatus
from eventz.models.coupon import Coupon
from eventz.models.otp import PasswordOtp
from eventz.models.chat import ChatMessage
from eventz.models.feedback import Feedback

__all__ = [
    "User", "Event", "Booking", "BookingStatus", "Coupon",
    "PasswordOtp", "ChatMessage", "Feedback",
]

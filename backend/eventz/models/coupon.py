"""
Coupon model: a percentage discount code with an expiry date.

`usage_limit` is stored for the admin screens but nothing decrements or
enforces it yet; 0 means unlimited.
"""

from sqlalchemy import CheckConstraint, Column, Date, Integer, String

from eventz.db.base import Base, TimestampMixin


class Coupon(Base, TimestampMixin):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, index=True)
    discount_percent = Column(Integer, nullable=False)
    usage_limit = Column(Integer, nullable=False, default=0)
    expires_at = Column(Date, nullable=False)
    created_by = Column(String(100), nullable=False, default="admin")

    __table_args__ = (
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="check_coupon_discount_range",
        ),
        CheckConstraint("usage_limit >= 0", name="check_coupon_usage_limit_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Coupon(code={self.code}, discount={self.discount_percent}%, expires={self.expires_at})>"

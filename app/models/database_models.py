from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime, timezone
from enum import Enum


def iso_now() -> str:
    """UTC timestamp in the millisecond 'Z' form the dashboard sorts on"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# Review Model
class ReviewCreate(BaseModel):
    name: Optional[str] = None
    text: Optional[str] = None
    rating: Optional[Any] = None  # coerced to a number on write


# Coupon Model
class CouponType(str, Enum):
    PERCENT = "percent"
    AMOUNT = "amount"


class CouponCreate(BaseModel):
    code: Optional[str] = None
    discount: Optional[Any] = None  # coerced to a number on write
    type: Optional[str] = Field(default=None, description="percent or amount, defaults to percent")


# User points (not backed by storage yet)
class PointsGrant(BaseModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    points: Optional[Any] = None


# Default board shown before anyone has written service_status
DEFAULT_SERVICE_STATUS = {
    "instagram": "operational",
    "tiktok": "operational",
    "facebook": "operational",
    "youtube": "operational",
}

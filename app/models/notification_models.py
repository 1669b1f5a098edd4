"""
Notification models for the push dispatch flow.

The JSON contract with the admin dashboard and the Android app is
camelCase, so fields are aliased; Python code uses the snake_case names.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class NotificationType(str, Enum):
    """Content kinds the app knows how to render. Unknown values are passed through."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class NotificationRequest(BaseModel):
    """Body of POST /api/send-notification"""
    model_config = ConfigDict(populate_by_name=True)

    # Optional at the model level so a missing field is a 400, not a 422
    title: Optional[str] = None
    body: Optional[str] = None
    type: Optional[str] = Field(default=None, description="Defaults to 'text'")
    media_url: Optional[str] = Field(default=None, alias="mediaUrl")
    is_high_alert: Optional[bool] = Field(default=False, alias="isHighAlert")
    target_url: Optional[str] = Field(default=None, alias="targetUrl", description="Deep link opened on tap")
    scheduled_time: Optional[str] = Field(default=None, alias="scheduledTime", description="ISO-8601 send time")


class NotificationRecord(BaseModel):
    """History document stored in the 'notifications' collection"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str
    type: str = NotificationType.TEXT.value
    media_url: str = Field(default="", alias="mediaUrl")
    is_high_alert: bool = Field(default=False, alias="isHighAlert")
    target_url: str = Field(default="", alias="targetUrl")

    @classmethod
    def from_request(cls, request: NotificationRequest) -> "NotificationRecord":
        return cls(
            title=request.title,
            body=request.body,
            type=request.type or NotificationType.TEXT.value,
            media_url=request.media_url or "",
            is_high_alert=bool(request.is_high_alert),
            target_url=request.target_url or "",
        )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class NotificationUpdate(BaseModel):
    """Body of PUT /api/notifications/{id}; only the visible text is editable"""
    title: Optional[str] = None
    body: Optional[str] = None

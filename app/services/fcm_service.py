import asyncio
import logging
from typing import Dict, Optional

from firebase_admin import messaging

from ..core.config import settings
from ..core.exceptions import DeliveryError
from ..core.firebase_init import initialize_firebase

logger = logging.getLogger(__name__)

# Android presentation
NOTIFICATION_ICON = "ic_launcher"
NOTIFICATION_COLOR = "#D32F2F"
DEFAULT_CHANNEL_ID = "default_channel"
HIGH_ALERT_CHANNEL_ID = "high_importance_channel"
HIGH_ALERT_SOUND = "default"


def build_android_config(is_high_alert: bool) -> messaging.AndroidConfig:
    """High alerts go to the elevated channel with an explicit sound; normal ones carry no sound."""
    if is_high_alert:
        return messaging.AndroidConfig(
            priority="high",
            notification=messaging.AndroidNotification(
                icon=NOTIFICATION_ICON,
                color=NOTIFICATION_COLOR,
                channel_id=HIGH_ALERT_CHANNEL_ID,
                priority="high",
                sound=HIGH_ALERT_SOUND,
            ),
        )
    return messaging.AndroidConfig(
        priority="normal",
        notification=messaging.AndroidNotification(
            icon=NOTIFICATION_ICON,
            color=NOTIFICATION_COLOR,
            channel_id=DEFAULT_CHANNEL_ID,
            priority="default",
        ),
    )


class FCMService:
    """Firebase Cloud Messaging service for topic broadcasts"""

    def __init__(self, topic: Optional[str] = None):
        self.topic = topic or settings.NOTIFICATION_TOPIC

    def build_topic_message(
        self,
        title: str,
        body: str,
        notification_type: str = "text",
        media_url: str = "",
        is_high_alert: bool = False,
        target_url: str = "",
    ) -> messaging.Message:
        """Build the broadcast message the app expects: visible notification plus a string data bag"""
        return messaging.Message(
            notification=messaging.Notification(
                title=title,
                body=body,
            ),
            data={
                "type": notification_type,
                "mediaUrl": media_url,
                "isHighAlert": "true" if is_high_alert else "false",
                "targetUrl": target_url,
            },
            android=build_android_config(is_high_alert),
            topic=self.topic,
        )

    async def send(self, message: messaging.Message) -> str:
        """Send a prepared message. Returns the FCM message id, raises DeliveryError on rejection."""
        try:
            if not initialize_firebase():
                raise RuntimeError("Firebase is not initialized - no service account credential available")
            response = await asyncio.to_thread(messaging.send, message)
            logger.info(f"Successfully sent message: {response}")
            return response
        except Exception as e:
            logger.error(f"Error sending FCM notification: {str(e)}")
            raise DeliveryError(str(e)) from e

    async def send_to_topic(
        self,
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
        sound: Optional[str] = None,
    ) -> str:
        """Send a plain notification to the broadcast topic"""
        message = messaging.Message(
            notification=messaging.Notification(
                title=title,
                body=body,
            ),
            data=data or {},
            android=messaging.AndroidConfig(
                notification=messaging.AndroidNotification(
                    icon=NOTIFICATION_ICON,
                    color=NOTIFICATION_COLOR,
                    sound=sound,
                ),
            ),
            topic=self.topic,
        )
        return await self.send(message)


fcm_service = FCMService()

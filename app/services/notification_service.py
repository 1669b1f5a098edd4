"""
Push notification dispatch and history.

A dispatch either sends right away (send, then write history, then answer)
or, when scheduledTime lies in the future, hands the same work to a one-shot
in-process job and answers before anything is sent. Failures inside a
deferred job are logged only; the caller has already been told "Scheduled".
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import logging

from dateutil.parser import isoparse
from firebase_admin import messaging

from ..core.exceptions import UpstreamError, ValidationError
from ..core.scheduler import schedule_once
from ..database.collections import COLLECTIONS
from ..database.database_service import SERVER_TIMESTAMP, database_service
from ..models.database_models import iso_now
from ..models.notification_models import NotificationRecord, NotificationRequest
from .fcm_service import fcm_service

logger = logging.getLogger(__name__)


def resolve_send_time(scheduled_time: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Return the aware datetime to defer until, or None to send immediately.

    Naive timestamps are read in server local time. Unparseable values and
    times not strictly in the future mean "send now".
    """
    if not scheduled_time:
        return None

    try:
        run_at = isoparse(scheduled_time)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Ignoring unparseable scheduledTime {scheduled_time!r}: {e}")
        return None

    if run_at.tzinfo is None:
        run_at = run_at.astimezone()

    now = now or datetime.now(timezone.utc)
    if run_at > now:
        return run_at
    return None


class NotificationService:
    def __init__(self):
        self.db = database_service
        self.fcm = fcm_service
        self.schedule = schedule_once

    async def dispatch(self, request: NotificationRequest) -> Dict[str, Any]:
        """Send (or schedule) a broadcast push and record it in history"""
        if not request.title or not request.body:
            raise ValidationError("Title and Body are required")

        record = NotificationRecord.from_request(request)
        message = self.fcm.build_topic_message(
            title=record.title,
            body=record.body,
            notification_type=record.type,
            media_url=record.media_url,
            is_high_alert=record.is_high_alert,
            target_url=record.target_url,
        )

        run_at = resolve_send_time(request.scheduled_time)
        if run_at is not None:
            self.schedule(run_at, self._send_scheduled, message, record)
            logger.info(f"Notification '{record.title}' scheduled for {run_at.isoformat()}")
            return {"success": True, "message": "Scheduled"}

        message_id = await self.fcm.send(message)
        await self.save_to_history(record)
        return {"success": True, "messageId": message_id}

    async def _send_scheduled(self, message: messaging.Message, record: NotificationRecord) -> None:
        """Body of a deferred job. Nothing here reaches the original caller."""
        try:
            await self.fcm.send(message)
            await self.save_to_history(record)
            logger.info(f"✅ Scheduled notification sent: {record.title}")
        except Exception as e:
            logger.error(f"❌ Scheduled notification failed: {str(e)}", exc_info=True)

    async def save_to_history(self, record: NotificationRecord) -> str:
        data = record.to_document()
        data["date"] = iso_now()
        data["timestamp"] = SERVER_TIMESTAMP

        success, doc_id, error = await self.db.create_document(COLLECTIONS['notifications'], data)
        if not success:
            raise UpstreamError(error or "Failed to save notification history")
        return doc_id

    async def list_history(self) -> List[Dict[str, Any]]:
        """History, newest first by server write time"""
        success, notifications, error = await self.db.query_documents(
            COLLECTIONS['notifications'],
            order_by=[('timestamp', 'desc')]
        )
        if not success:
            raise UpstreamError(error)
        return notifications

    async def update_history(self, notification_id: str, changes: Dict[str, Any]) -> None:
        """Write only the editable fields the caller actually sent"""
        fields = {k: v for k, v in changes.items() if k in ("title", "body")}
        if not fields:
            raise ValidationError("Title or Body is required")

        success, error = await self.db.update_document(
            COLLECTIONS['notifications'],
            notification_id,
            fields
        )
        if not success:
            raise UpstreamError(error)

    async def delete_history(self, notification_id: str) -> None:
        success, error = await self.db.delete_document(COLLECTIONS['notifications'], notification_id)
        if not success:
            raise UpstreamError(error)

    async def count_history(self) -> int:
        success, count, error = await self.db.count_documents(COLLECTIONS['notifications'])
        if not success:
            raise UpstreamError(error)
        return count


notification_service = NotificationService()

"""
Notification Router - API endpoints for push notifications

Provides endpoints for:
- Sending (or scheduling) a broadcast push
- Listing, editing and deleting notification history
- Dashboard statistics
"""

import logging
from fastapi import APIRouter, Depends, Path
from typing import Any, Dict, List

from ..auth.dependencies import require_session
from ..core.exceptions import AdminAPIError, UpstreamError
from ..models.database_models import iso_now
from ..models.notification_models import NotificationRequest, NotificationUpdate
from ..services.notification_service import notification_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/send-notification", dependencies=[Depends(require_session)])
async def send_notification(payload: NotificationRequest):
    """Send now, or schedule when scheduledTime is in the future"""
    try:
        return await notification_service.dispatch(payload)
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error sending notification: {str(e)}")
        raise UpstreamError(str(e))


@router.get("/notifications", response_model=List[Dict[str, Any]], dependencies=[Depends(require_session)])
async def get_notifications():
    """History, newest first"""
    try:
        return await notification_service.list_history()
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error fetching history: {str(e)}")
        raise UpstreamError(str(e))


@router.delete("/notifications/{notification_id}", dependencies=[Depends(require_session)])
async def delete_notification(notification_id: str = Path(..., description="Notification ID")):
    try:
        await notification_service.delete_history(notification_id)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error deleting notification {notification_id}: {str(e)}")
        raise UpstreamError(str(e))


@router.put("/notifications/{notification_id}", dependencies=[Depends(require_session)])
async def update_notification(
    payload: NotificationUpdate,
    notification_id: str = Path(..., description="Notification ID")
):
    """Edit the stored title/body. The push that already went out is unchanged."""
    try:
        await notification_service.update_history(notification_id, payload.model_dump(exclude_unset=True))
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error updating notification {notification_id}: {str(e)}")
        raise UpstreamError(str(e))


@router.get("/stats")
async def get_stats():
    try:
        count = await notification_service.count_history()
        return {
            "total_notifications": count,
            "server_time": iso_now(),
        }
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error computing stats: {str(e)}")
        raise UpstreamError(str(e))

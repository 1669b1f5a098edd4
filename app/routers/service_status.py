import logging
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from ..auth.dependencies import require_session
from ..core.exceptions import AdminAPIError, UpstreamError
from ..services.resource_service import service_status_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/service-status", tags=["service-status"])


@router.get("")
async def get_service_status():
    """Status board; every service reads 'operational' until someone sets it"""
    try:
        return await service_status_service.get_status()
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error reading service status: {str(e)}")
        raise UpstreamError(str(e))


@router.post("", dependencies=[Depends(require_session)])
async def update_service_status(payload: Dict[str, Any] = Body(...)):
    """Merge the given service → status pairs into the board"""
    try:
        await service_status_service.update_status(payload)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error updating service status: {str(e)}")
        raise UpstreamError(str(e))

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from ..auth.dependencies import require_session
from ..core.exceptions import AdminAPIError, UpstreamError
from ..services.remote_config_service import remote_config_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["remote-config"], dependencies=[Depends(require_session)])


@router.get("/config")
async def get_config():
    """Current feature flags and app settings from Remote Config"""
    try:
        return await remote_config_service.get_config()
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error getting config: {str(e)}")
        raise UpstreamError(str(e))


@router.post("/update-config")
async def update_config(payload: Dict[str, Any] = Body(...)):
    """Publish the flat config map; parameters outside the known set are left alone"""
    try:
        await remote_config_service.set_config(payload)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error updating config: {str(e)}")
        raise UpstreamError(str(e))

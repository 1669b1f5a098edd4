import logging
from fastapi import APIRouter, Depends

from ..auth.dependencies import require_session
from ..models.database_models import PointsGrant

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/user", tags=["users"], dependencies=[Depends(require_session)])


@router.post("/points")
async def add_points(payload: PointsGrant):
    """Loyalty points are not persisted yet; the call is acknowledged and logged."""
    logger.info(f"Simulated points grant: user={payload.user_id} points={payload.points}")
    return {"success": True, "message": "Points added (Simulated)"}

import logging
from fastapi import APIRouter, Depends, Path
from typing import Any, Dict, List

from ..auth.dependencies import require_session
from ..core.exceptions import AdminAPIError, UpstreamError
from ..models.database_models import CouponCreate
from ..services.resource_service import coupon_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/coupons", tags=["coupons"], dependencies=[Depends(require_session)])


@router.post("")
async def create_coupon(payload: CouponCreate):
    """Codes are stored uppercased; new coupons start active"""
    try:
        await coupon_service.create_coupon(payload)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error creating coupon: {str(e)}")
        raise UpstreamError(str(e))


@router.get("", response_model=List[Dict[str, Any]])
async def list_coupons():
    try:
        return await coupon_service.list_all()
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error listing coupons: {str(e)}")
        raise UpstreamError(str(e))


@router.delete("/{coupon_id}")
async def delete_coupon(coupon_id: str = Path(..., description="Coupon ID")):
    try:
        await coupon_service.delete(coupon_id)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error deleting coupon {coupon_id}: {str(e)}")
        raise UpstreamError(str(e))

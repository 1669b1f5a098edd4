import logging
from fastapi import APIRouter, Depends, Path
from typing import Any, Dict, List

from ..auth.dependencies import require_session
from ..core.exceptions import AdminAPIError, UpstreamError
from ..models.database_models import ReviewCreate
from ..services.resource_service import review_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", dependencies=[Depends(require_session)])
async def create_review(payload: ReviewCreate):
    try:
        await review_service.create_review(payload)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error creating review: {str(e)}")
        raise UpstreamError(str(e))


@router.get("", response_model=List[Dict[str, Any]])
async def list_reviews():
    """All reviews, newest first. Public; the app filters on 'approved' itself."""
    try:
        return await review_service.list_all()
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error listing reviews: {str(e)}")
        raise UpstreamError(str(e))


@router.put("/{review_id}/approve", dependencies=[Depends(require_session)])
async def approve_review(review_id: str = Path(..., description="Review ID")):
    try:
        await review_service.approve(review_id)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error approving review {review_id}: {str(e)}")
        raise UpstreamError(str(e))


@router.delete("/{review_id}", dependencies=[Depends(require_session)])
async def delete_review(review_id: str = Path(..., description="Review ID")):
    try:
        await review_service.delete(review_id)
        return {"success": True}
    except AdminAPIError:
        raise
    except Exception as e:
        logger.error(f"Error deleting review {review_id}: {str(e)}")
        raise UpstreamError(str(e))

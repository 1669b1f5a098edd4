"""
Reviews, coupons and the service-status board.

Plain pass-through to Firestore with light field shaping. Missing ids are
not checked up front; whatever Firestore reports is surfaced.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging
import math

from ..core.exceptions import UpstreamError, ValidationError
from ..database.collections import COLLECTIONS, SERVICE_STATUS_DOC_ID
from ..database.database_service import database_service
from ..models.database_models import (
    DEFAULT_SERVICE_STATUS, CouponCreate, CouponType, ReviewCreate, iso_now
)

logger = logging.getLogger(__name__)


def to_number(value: Any) -> Optional[float]:
    """Numeric coercion for form input. Integral values stay int; junk becomes None."""
    if isinstance(value, bool):
        return int(value)
    # a blank form field counts as zero
    if isinstance(value, str) and not value.strip():
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


class ResourceService:
    """create/list/update/delete over one collection"""

    def __init__(self, collection: str, order_by: Optional[List[Tuple[str, str]]] = None):
        self.collection = collection
        self.order_by = order_by
        self.db = database_service

    async def create(self, data: Dict[str, Any]) -> str:
        success, doc_id, error = await self.db.create_document(self.collection, data)
        if not success:
            raise UpstreamError(error)
        return doc_id

    async def list_all(self) -> List[Dict[str, Any]]:
        success, documents, error = await self.db.query_documents(self.collection, order_by=self.order_by)
        if not success:
            raise UpstreamError(error)
        return documents

    async def update(self, document_id: str, data: Dict[str, Any]) -> None:
        success, error = await self.db.update_document(self.collection, document_id, data)
        if not success:
            raise UpstreamError(error)

    async def delete(self, document_id: str) -> None:
        success, error = await self.db.delete_document(self.collection, document_id)
        if not success:
            raise UpstreamError(error)


class ReviewService(ResourceService):
    def __init__(self):
        super().__init__(COLLECTIONS['reviews'], order_by=[('date', 'desc')])

    async def create_review(self, review: ReviewCreate) -> str:
        # New reviews wait for moderation
        return await self.create({
            "name": review.name,
            "text": review.text,
            "rating": to_number(review.rating),
            "approved": False,
            "date": iso_now(),
        })

    async def approve(self, review_id: str) -> None:
        await self.update(review_id, {"approved": True})


class CouponService(ResourceService):
    def __init__(self):
        super().__init__(COLLECTIONS['coupons'])

    async def create_coupon(self, coupon: CouponCreate) -> str:
        if not coupon.code:
            raise ValidationError("Coupon code is required")
        return await self.create({
            "code": coupon.code.upper(),
            "discount": to_number(coupon.discount),
            "type": coupon.type or CouponType.PERCENT.value,
            "active": True,
        })


class ServiceStatusService:
    """Singleton document system/service_status"""

    def __init__(self):
        self.db = database_service

    async def get_status(self) -> Dict[str, Any]:
        success, status, error = await self.db.get_document(COLLECTIONS['system'], SERVICE_STATUS_DOC_ID)
        if not success:
            raise UpstreamError(error)
        if status is None:
            return dict(DEFAULT_SERVICE_STATUS)
        return status

    async def update_status(self, statuses: Dict[str, Any]) -> None:
        success, error = await self.db.set_document(
            COLLECTIONS['system'], SERVICE_STATUS_DOC_ID, statuses, merge=True
        )
        if not success:
            raise UpstreamError(error)


review_service = ReviewService()
coupon_service = CouponService()
service_status_service = ServiceStatusService()

"""
Thin async wrapper around Firestore.

Every method returns a tuple whose first element is a success flag and
whose last element is the error message (None on success). The Firestore
SDK is blocking, so calls run in a worker thread.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter, Query

from .firestore_client import get_firestore_client

logger = logging.getLogger(__name__)

__all__ = ["DatabaseService", "database_service", "SERVER_TIMESTAMP"]


class DatabaseService:
    """CRUD helpers over Firestore collections"""

    def __init__(self):
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = get_firestore_client()
        return self._client

    def _collection(self, collection: str):
        return self.client.collection(collection)

    async def create_document(
        self,
        collection: str,
        data: Dict[str, Any],
        document_id: Optional[str] = None
    ) -> Tuple[bool, Optional[str], Optional[str]]:
        """Create a document; the id is generated by Firestore unless given"""
        try:
            def _create():
                coll = self._collection(collection)
                if document_id:
                    coll.document(document_id).set(data)
                    return document_id
                _, doc_ref = coll.add(data)
                return doc_ref.id

            doc_id = await asyncio.to_thread(_create)
            logger.info(f"Created document {doc_id} in {collection}")
            return True, doc_id, None
        except Exception as e:
            logger.error(f"Error creating document in {collection}: {str(e)}")
            return False, None, str(e)

    async def get_document(
        self, collection: str, document_id: str
    ) -> Tuple[bool, Optional[Dict[str, Any]], Optional[str]]:
        """Fetch one document. A missing document is (True, None, None)."""
        try:
            snapshot = await asyncio.to_thread(
                lambda: self._collection(collection).document(document_id).get()
            )
            if not snapshot.exists:
                return True, None, None
            return True, snapshot.to_dict(), None
        except Exception as e:
            logger.error(f"Error getting document {collection}/{document_id}: {str(e)}")
            return False, None, str(e)

    async def update_document(
        self, collection: str, document_id: str, data: Dict[str, Any]
    ) -> Tuple[bool, Optional[str]]:
        """Update fields of an existing document; Firestore fails if it is missing"""
        try:
            await asyncio.to_thread(
                lambda: self._collection(collection).document(document_id).update(data)
            )
            return True, None
        except Exception as e:
            logger.error(f"Error updating document {collection}/{document_id}: {str(e)}")
            return False, str(e)

    async def set_document(
        self,
        collection: str,
        document_id: str,
        data: Dict[str, Any],
        merge: bool = False
    ) -> Tuple[bool, Optional[str]]:
        """Write a document at a fixed id, optionally merging into what is there"""
        try:
            await asyncio.to_thread(
                lambda: self._collection(collection).document(document_id).set(data, merge=merge)
            )
            return True, None
        except Exception as e:
            logger.error(f"Error setting document {collection}/{document_id}: {str(e)}")
            return False, str(e)

    async def delete_document(
        self, collection: str, document_id: str
    ) -> Tuple[bool, Optional[str]]:
        try:
            await asyncio.to_thread(
                lambda: self._collection(collection).document(document_id).delete()
            )
            logger.info(f"Deleted document {collection}/{document_id}")
            return True, None
        except Exception as e:
            logger.error(f"Error deleting document {collection}/{document_id}: {str(e)}")
            return False, str(e)

    async def query_documents(
        self,
        collection: str,
        filters: Optional[List[Tuple[str, str, Any]]] = None,
        limit: Optional[int] = None,
        order_by: Optional[List[Tuple[str, str]]] = None
    ) -> Tuple[bool, List[Dict[str, Any]], Optional[str]]:
        """
        Query a collection.

        filters:  [(field, op, value), ...]
        order_by: [(field, 'asc' | 'desc'), ...]
        Each returned document carries its Firestore id under 'id'.
        """
        try:
            def _query():
                query = self._collection(collection)
                for field, op, value in filters or []:
                    query = query.where(filter=FieldFilter(field, op, value))
                for field, direction in order_by or []:
                    query = query.order_by(
                        field,
                        direction=Query.DESCENDING if direction == 'desc' else Query.ASCENDING
                    )
                if limit:
                    query = query.limit(limit)
                return [{'id': doc.id, **doc.to_dict()} for doc in query.stream()]

            documents = await asyncio.to_thread(_query)
            return True, documents, None
        except Exception as e:
            logger.error(f"Error querying {collection}: {str(e)}")
            return False, [], str(e)

    async def count_documents(self, collection: str) -> Tuple[bool, int, Optional[str]]:
        """Aggregate count of every document in a collection"""
        try:
            def _count():
                results = self._collection(collection).count().get()
                return int(results[0][0].value)

            count = await asyncio.to_thread(_count)
            return True, count, None
        except Exception as e:
            logger.error(f"Error counting {collection}: {str(e)}")
            return False, 0, str(e)


database_service = DatabaseService()

from firebase_admin import firestore

from ..core.firebase_init import initialize_firebase
from ..core.exceptions import UpstreamError


def get_firestore_client():
    """Return the Firestore client of the default Firebase app."""
    if not initialize_firebase():
        raise UpstreamError("Firebase is not initialized - no service account credential available")
    return firestore.client()

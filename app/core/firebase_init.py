import firebase_admin
from firebase_admin import credentials
import json
import logging
import os
from typing import Optional

from .config import settings

logger = logging.getLogger(__name__)

_firebase_initialized = False


def _load_credential() -> Optional[credentials.Certificate]:
    """
    Build a service-account credential.
    GOOGLE_SERVICE_ACCOUNT_JSON (inline JSON) is tried first, then the local file.
    """
    if settings.GOOGLE_SERVICE_ACCOUNT_JSON:
        try:
            return credentials.Certificate(json.loads(settings.GOOGLE_SERVICE_ACCOUNT_JSON))
        except (ValueError, TypeError) as e:
            logger.error(f"❌ Failed to parse GOOGLE_SERVICE_ACCOUNT_JSON: {e}")

    service_account_path = settings.FIREBASE_SERVICE_ACCOUNT_PATH
    if not os.path.exists(service_account_path):
        logger.warning(f"Firebase service account file not found at {service_account_path}")
        return None

    return credentials.Certificate(service_account_path)


def initialize_firebase() -> bool:
    """
    Initialize Firebase Admin SDK if not already initialized.
    Returns True if successful, False otherwise.
    """
    global _firebase_initialized

    if _firebase_initialized or firebase_admin._apps:
        return True

    try:
        cred = _load_credential()
        if cred is None:
            logger.warning("Firebase will not be available for this session.")
            return False

        firebase_admin.initialize_app(cred)

        _firebase_initialized = True
        logger.info("✅ Firebase initialized successfully")
        return True

    except Exception as e:
        logger.error(f"❌ Firebase initialization failed: {e}")
        return False


def is_firebase_available() -> bool:
    """Check if Firebase is available and initialized."""
    return _firebase_initialized or bool(firebase_admin._apps)


def get_firebase_status() -> dict:
    """Get Firebase initialization status for debugging."""
    return {
        "initialized": _firebase_initialized,
        "apps_count": len(firebase_admin._apps) if firebase_admin._apps else 0,
        "available": is_firebase_available()
    }

"""
Error types raised by services and routers.

Each carries the HTTP status it maps to; the handler in app.main renders
them as {"error": message}.
"""


class AdminAPIError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AdminAPIError):
    """A required request field is missing."""
    status_code = 400


class AuthError(AdminAPIError):
    """No authenticated session, or a wrong password."""
    status_code = 401


class UpstreamError(AdminAPIError):
    """Firestore, FCM or Remote Config rejected the call."""
    status_code = 500


class DeliveryError(UpstreamError):
    """The messaging client rejected a push send."""

"""Error taxonomy for the payment service.

Every error carries the HTTP status and JSON body it is reported with, so the
boundary needs a single exception handler (see ``main.py``).
"""
from typing import Optional


class PaymentServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(PaymentServiceError):
    """Missing or malformed request fields."""
    status_code = 400
    default_message = "Missing fields"


class AuthenticationError(PaymentServiceError):
    """Payment signature did not match."""
    status_code = 400
    default_message = "Invalid signature"


class TokenError(AuthenticationError):
    """Bearer token missing, malformed, forged or expired."""
    status_code = 403
    default_message = "Unauthorized"

    def to_dict(self) -> dict:
        return {"message": self.message}


class UpstreamError(PaymentServiceError):
    """The payment gateway call failed; its message is passed through."""
    status_code = 500
    default_message = "create-order failed"

    def to_dict(self) -> dict:
        return {"error": self.message}


class StorageError(PaymentServiceError):
    """Persistence fault. The message never carries driver details."""
    status_code = 500
    default_message = "Storage error"

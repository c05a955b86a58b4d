"""Gateway notification exports"""

from .exceptions import (
    InvalidSignatureError,
    MalformedPayloadError,
    MissingFieldsError,
    NotificationError,
)
from .models import Notification
from .verifier import NotificationVerifier, compute_signature, parse_body

__all__ = [
    "InvalidSignatureError",
    "MalformedPayloadError",
    "MissingFieldsError",
    "Notification",
    "NotificationError",
    "NotificationVerifier",
    "compute_signature",
    "parse_body",
]

"""Gateway notification verification errors."""


class NotificationError(Exception):
    """Base class for rejected gateway notifications."""


class MalformedPayloadError(NotificationError):
    """Raised when the request body cannot be decoded into an object."""


class MissingFieldsError(NotificationError):
    """Raised when order_id or transaction_status is absent."""


class InvalidSignatureError(NotificationError):
    """Raised when signature_key does not match the recomputed digest."""

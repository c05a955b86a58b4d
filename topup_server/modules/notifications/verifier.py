"""Decoding and authentication of inbound gateway notifications.

The gateway posts a JSON document (some proxies re-encode it as a form or drop
the content type). Authenticity is established with the ``signature_key``
field, a SHA-512 hex digest over ``order_id + status_code + gross_amount +
server_key``. Nothing in this module touches storage.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl

from .exceptions import InvalidSignatureError, MalformedPayloadError, MissingFieldsError
from .models import Notification

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def compute_signature(
    order_id: str,
    status_code: Optional[str],
    gross_amount: Optional[str],
    server_key: str,
) -> str:
    raw = f"{order_id}{status_code or ''}{gross_amount or ''}{server_key}"
    return hashlib.sha512(raw.encode("utf-8")).hexdigest()


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError("Invalid JSON format") from exc


def parse_body(content_type: Optional[str], body: bytes) -> dict[str, Any]:
    """Decode a notification body into a string-keyed mapping."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedPayloadError("Request body is not valid UTF-8") from exc

    if not text.strip():
        raise MalformedPayloadError("Empty request body")

    if media_type == FORM_CONTENT_TYPE:
        data: Any = dict(parse_qsl(text, keep_blank_values=True))
    elif media_type == JSON_CONTENT_TYPE or media_type.endswith("+json"):
        data = _decode_json(text)
    else:
        logger.debug("Unknown notification content type %r, trying JSON", content_type)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedPayloadError("Unable to parse request body") from exc

    if not isinstance(data, dict):
        raise MalformedPayloadError("Notification body must be an object")
    return data


@dataclass(slots=True)
class NotificationVerifier:
    server_key: Optional[str] = None
    require_signature: bool = False

    def verify(self, raw: Mapping[str, Any]) -> Notification:
        order_id = _as_text(raw.get("order_id"))
        transaction_status = _as_text(raw.get("transaction_status"))
        if not order_id or not transaction_status:
            missing = [
                name
                for name, value in (("order_id", order_id), ("transaction_status", transaction_status))
                if not value
            ]
            raise MissingFieldsError(f"Missing required fields: {', '.join(missing)}")

        notification = Notification(
            order_id=order_id,
            transaction_status=transaction_status.lower(),
            fraud_status=(_as_text(raw.get("fraud_status")) or "").lower() or None,
            status_code=_as_text(raw.get("status_code")),
            gross_amount=_as_text(raw.get("gross_amount")),
            signature_key=_as_text(raw.get("signature_key")),
            payload=dict(raw),
        )
        self._check_signature(notification)
        return notification

    def verify_request(self, content_type: Optional[str], body: bytes) -> Notification:
        return self.verify(parse_body(content_type, body))

    def _check_signature(self, notification: Notification) -> None:
        if not self.server_key or not notification.signature_key:
            if self.require_signature:
                logger.warning("Rejected unsigned notification for order %s", notification.order_id)
                raise InvalidSignatureError("Signature required")
            return

        expected = compute_signature(
            notification.order_id,
            notification.status_code,
            notification.gross_amount,
            self.server_key,
        )
        if not hmac.compare_digest(expected, notification.signature_key.lower()):
            logger.warning("Invalid signature for order %s", notification.order_id)
            raise InvalidSignatureError("Invalid signature")

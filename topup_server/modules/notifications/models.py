"""Domain model for gateway payment notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class Notification:
    order_id: str
    transaction_status: str
    fraud_status: Optional[str] = None
    status_code: Optional[str] = None
    gross_amount: Optional[str] = None
    signature_key: Optional[str] = None
    # Verbatim decoded body, kept for the audit trail.
    payload: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

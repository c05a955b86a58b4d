"""Domain model for payment attempts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    CHALLENGE = "challenge"
    FAILED = "failed"


@dataclass(slots=True)
class Transaction:
    id: str
    order_id: str
    user_id: str
    service_id: Optional[str]
    service_name: Optional[str]
    amount: int
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    gateway_response_payload: Optional[dict[str, Any]] = field(default=None, repr=False)

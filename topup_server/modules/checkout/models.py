"""Domain models for checkout initiation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from topup_server.modules.transactions.models import Transaction


@dataclass(slots=True)
class SnapTransaction:
    token: str
    redirect_url: str


@dataclass(slots=True)
class CheckoutInput:
    order_id: str
    amount: int
    customer_details: dict[str, Any] = field(default_factory=dict)
    item_details: list[dict[str, Any]] = field(default_factory=list)
    user_id: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None


@dataclass(slots=True)
class CheckoutSession:
    token: str
    redirect_url: str
    transaction: Optional[Transaction] = None

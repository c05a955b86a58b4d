"""Result model for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from topup_server.modules.ledger.models import BalanceChange


@dataclass(slots=True)
class ReconciliationResult:
    order_id: str
    status: str
    previous_status: str
    credited: bool = False
    balance_change: Optional[BalanceChange] = None
    skipped_reason: Optional[str] = None

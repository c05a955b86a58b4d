"""Domain models for balance ledger operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class BalanceAction(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"


@dataclass(slots=True)
class BalanceLogEntry:
    id: str
    user_id: str
    amount: int
    action: str
    reason: Optional[str]
    order_id: Optional[str]
    previous_balance: int
    new_balance: int
    timestamp: Optional[datetime]


@dataclass(slots=True)
class BalanceChange:
    user_id: str
    previous_balance: int
    new_balance: int
    log_entry: BalanceLogEntry

    @property
    def delta(self) -> int:
        return self.new_balance - self.previous_balance

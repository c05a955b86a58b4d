"""Balance ledger exports"""

from .exceptions import InvalidActionError, InvalidAmountError
from .models import BalanceAction, BalanceChange, BalanceLogEntry
from .service import BalanceLedger, compute_new_balance, parse_action

__all__ = [
    "BalanceAction",
    "BalanceChange",
    "BalanceLedger",
    "BalanceLogEntry",
    "InvalidActionError",
    "InvalidAmountError",
    "compute_new_balance",
    "parse_action",
]

"""SQLAlchemy-backed repository implementations."""

from .ledger_repository import SqlLedgerRepository
from .transaction_repository import SqlTransactionRepository
from .user_repository import SqlUserRepository

__all__ = [
    "SqlLedgerRepository",
    "SqlTransactionRepository",
    "SqlUserRepository",
]

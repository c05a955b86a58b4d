"""Transaction record exports"""

from .exceptions import DuplicateOrderIdError, TransactionError, TransactionNotFoundError
from .models import Transaction, TransactionStatus
from .service import TransactionStore

__all__ = [
    "DuplicateOrderIdError",
    "Transaction",
    "TransactionError",
    "TransactionNotFoundError",
    "TransactionStatus",
    "TransactionStore",
]

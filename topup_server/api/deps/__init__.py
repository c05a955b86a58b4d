"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_balance_ledger,
    get_checkout_service,
    get_notification_verifier,
    get_reconciliation_engine,
    get_snap_client,
    get_transaction_store,
    get_user_service,
)

__all__ = [
    "get_db_session",
    "get_balance_ledger",
    "get_checkout_service",
    "get_notification_verifier",
    "get_reconciliation_engine",
    "get_snap_client",
    "get_transaction_store",
    "get_user_service",
]

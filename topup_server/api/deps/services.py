"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.core.config import get_settings
from topup_server.modules.checkout import CheckoutService, MidtransSnapClient
from topup_server.modules.ledger import BalanceLedger
from topup_server.modules.notifications import NotificationVerifier
from topup_server.modules.reconciliation import ReconciliationEngine
from topup_server.modules.transactions import TransactionStore
from topup_server.modules.users import UserService

from .database import get_db_session


def get_notification_verifier() -> NotificationVerifier:
    settings = get_settings().midtrans
    return NotificationVerifier(
        server_key=settings.server_key,
        require_signature=settings.require_signature,
    )


def get_snap_client() -> MidtransSnapClient:
    return MidtransSnapClient.from_settings(get_settings().midtrans)


def get_reconciliation_engine(db: AsyncSession = Depends(get_db_session)) -> ReconciliationEngine:
    return ReconciliationEngine.with_session(db)


def get_balance_ledger(db: AsyncSession = Depends(get_db_session)) -> BalanceLedger:
    return BalanceLedger.with_session(db)


def get_transaction_store(db: AsyncSession = Depends(get_db_session)) -> TransactionStore:
    return TransactionStore.with_session(db)


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService.with_session(db)


def get_checkout_service(
    gateway: MidtransSnapClient = Depends(get_snap_client),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> CheckoutService:
    return CheckoutService(gateway=gateway, transactions=transactions)


__all__ = [
    "get_balance_ledger",
    "get_checkout_service",
    "get_notification_verifier",
    "get_reconciliation_engine",
    "get_snap_client",
    "get_transaction_store",
    "get_user_service",
]

"""Turns verified gateway notifications into transaction updates and credits."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.modules.ledger.models import BalanceAction
from topup_server.modules.ledger.service import BalanceLedger
from topup_server.modules.notifications.models import Notification
from topup_server.modules.transactions.exceptions import TransactionNotFoundError
from topup_server.modules.transactions.models import Transaction, TransactionStatus
from topup_server.modules.transactions.service import TransactionStore
from topup_server.modules.users.exceptions import UserNotFoundError

from .models import ReconciliationResult
from .status import map_gateway_status

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "user_not_found"


def credit_reason(transaction: Transaction) -> str:
    return f"Payment success - {transaction.service_name or transaction.order_id}"


@dataclass(slots=True)
class ReconciliationEngine:
    """Applies a notification to its transaction and credits the ledger at most once.

    All writes go through the caller's session, so the status transition and the
    balance credit commit or roll back together. Running the same notification
    again after a failure is safe: the credit is keyed on the transition into
    ``success``, which only one run can perform.
    """

    transactions: TransactionStore
    ledger: BalanceLedger

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ReconciliationEngine":
        return cls(
            transactions=TransactionStore.with_session(session),
            ledger=BalanceLedger.with_session(session),
        )

    async def reconcile(self, notification: Notification) -> ReconciliationResult:
        transaction = await self.transactions.find_by_order_id(notification.order_id)
        if transaction is None:
            logger.warning("Transaction not found for order %s", notification.order_id)
            raise TransactionNotFoundError(notification.order_id)

        target = map_gateway_status(notification.transaction_status, notification.fraud_status)
        previous_status = transaction.status
        logger.info(
            "Reconciling order %s: gateway=%s fraud=%s -> %s (was %s)",
            notification.order_id,
            notification.transaction_status,
            notification.fraud_status,
            target.value,
            previous_status,
        )

        if target is TransactionStatus.SUCCESS:
            return await self._settle(transaction, notification)

        updated = await self.transactions.update_status_unless_success(
            notification.order_id,
            target,
            notification.payload,
        )
        if not updated:
            # success is terminal; late or out-of-order notifications only refresh the audit payload
            logger.warning(
                "Ignoring %s for already successful order %s",
                target.value,
                notification.order_id,
            )
            await self.transactions.record_payload(notification.order_id, notification.payload)
            return ReconciliationResult(
                order_id=notification.order_id,
                status=TransactionStatus.SUCCESS.value,
                previous_status=previous_status,
            )

        return ReconciliationResult(
            order_id=notification.order_id,
            status=target.value,
            previous_status=previous_status,
        )

    async def _settle(self, transaction: Transaction, notification: Notification) -> ReconciliationResult:
        transitioned = await self.transactions.transition_to_success(
            notification.order_id,
            notification.payload,
        )
        result = ReconciliationResult(
            order_id=notification.order_id,
            status=TransactionStatus.SUCCESS.value,
            previous_status=transaction.status,
        )
        if not transitioned:
            logger.info("Order %s already settled, skipping credit", notification.order_id)
            await self.transactions.record_payload(notification.order_id, notification.payload)
            return result

        try:
            result.balance_change = await self.ledger.apply(
                transaction.user_id,
                transaction.amount,
                BalanceAction.ADD,
                reason=credit_reason(transaction),
                order_id=transaction.order_id,
            )
        except UserNotFoundError:
            logger.warning(
                "User %s not found, order %s marked successful without credit",
                transaction.user_id,
                transaction.order_id,
            )
            result.skipped_reason = USER_NOT_FOUND
            return result

        result.credited = True
        return result

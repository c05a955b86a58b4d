"""Balance ledger domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.core.config import get_settings
from topup_server.db.models import BalanceLog as BalanceLogModel
from topup_server.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository
from topup_server.modules.common.exceptions import InvalidAmountError, PersistenceError
from topup_server.modules.users.exceptions import UserNotFoundError

from .exceptions import InvalidActionError
from .models import BalanceAction, BalanceChange, BalanceLogEntry
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


def parse_action(action: str | BalanceAction) -> BalanceAction:
    try:
        return BalanceAction(action)
    except ValueError as exc:
        raise InvalidActionError(f"Invalid action: {action}") from exc


def compute_new_balance(action: BalanceAction, previous_balance: int, amount: int) -> int:
    """Apply ``action`` to ``previous_balance``.

    ``subtract`` treats ``amount`` as a magnitude and clamps the result at zero;
    ``add`` and ``set`` reject negative amounts.
    """
    if action is BalanceAction.SUBTRACT:
        return max(0, previous_balance - abs(amount))
    if amount < 0:
        raise InvalidAmountError(f"Amount must not be negative for {action.value}: {amount}")
    if action is BalanceAction.ADD:
        return previous_balance + amount
    return amount


@dataclass(slots=True)
class BalanceLedger:
    repository: LedgerRepository
    max_attempts: int = 5

    @classmethod
    def with_session(cls, session: AsyncSession) -> "BalanceLedger":
        return cls(SqlLedgerRepository(session), max_attempts=get_settings().ledger.max_attempts)

    async def apply(
        self,
        user_id: str,
        amount: int,
        action: str | BalanceAction,
        reason: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> BalanceChange:
        balance_action = parse_action(action)
        if balance_action is BalanceAction.SUBTRACT:
            amount = abs(amount)

        try:
            for attempt in range(1, self.max_attempts + 1):
                current = await self.repository.read_balance_for_update(user_id)
                if current is None:
                    raise UserNotFoundError(user_id)
                previous_balance, version = current
                new_balance = compute_new_balance(balance_action, previous_balance, amount)

                swapped = await self.repository.compare_and_set_balance(
                    user_id,
                    expected_version=version,
                    new_balance=new_balance,
                )
                if not swapped:
                    logger.info(
                        "Balance of user %s changed concurrently (attempt %s/%s)",
                        user_id,
                        attempt,
                        self.max_attempts,
                    )
                    continue

                log = await self.repository.add_log(
                    user_id=user_id,
                    amount=amount,
                    action=balance_action.value,
                    reason=reason,
                    order_id=order_id,
                    previous_balance=previous_balance,
                    new_balance=new_balance,
                )
                logger.info(
                    "User %s balance %s: %s -> %s (%s)",
                    user_id,
                    balance_action.value,
                    previous_balance,
                    new_balance,
                    reason,
                )
                return BalanceChange(
                    user_id=user_id,
                    previous_balance=previous_balance,
                    new_balance=new_balance,
                    log_entry=self._to_entry(log),
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update balance of user {user_id}") from exc

        raise PersistenceError(
            f"Balance of user {user_id} kept changing after {self.max_attempts} attempts"
        )

    async def list_logs(self, user_id: str, limit: int = 20, offset: int = 0) -> list[BalanceLogEntry]:
        try:
            rows = await self.repository.list_logs(user_id, limit, offset)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load balance logs of user {user_id}") from exc
        return [self._to_entry(row) for row in rows]

    @staticmethod
    def _to_entry(model: BalanceLogModel) -> BalanceLogEntry:
        return BalanceLogEntry(
            id=model.id,
            user_id=model.user_id,
            amount=model.amount,
            action=model.action,
            reason=model.reason,
            order_id=model.order_id,
            previous_balance=model.previous_balance,
            new_balance=model.new_balance,
            timestamp=model.timestamp,
        )

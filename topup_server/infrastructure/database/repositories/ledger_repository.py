"""SQLAlchemy implementation for the balance ledger"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update

from topup_server.db.models import BalanceLog, User, utcnow
from topup_server.modules.common.repository import AsyncRepository


class SqlLedgerRepository(AsyncRepository[BalanceLog]):
    async def read_balance_for_update(self, user_id: str) -> tuple[int, int] | None:
        """Return ``(balance, balance_version)`` and lock the row where supported."""
        stmt = (
            select(User.balance, User.balance_version)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return int(row.balance or 0), int(row.balance_version or 0)

    async def compare_and_set_balance(
        self,
        user_id: str,
        *,
        expected_version: int,
        new_balance: int,
    ) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id, User.balance_version == expected_version)
            .values(
                balance=new_balance,
                balance_version=expected_version + 1,
                updated_at=utcnow(),
            )
        )
        return await self.execute_update(stmt) == 1

    async def add_log(
        self,
        *,
        user_id: str,
        amount: int,
        action: str,
        reason: str | None,
        order_id: str | None,
        previous_balance: int,
        new_balance: int,
    ) -> BalanceLog:
        entry = BalanceLog(
            user_id=user_id,
            amount=amount,
            action=action,
            reason=reason,
            order_id=order_id,
            previous_balance=previous_balance,
            new_balance=new_balance,
        )
        return await self.add(entry)

    async def list_logs(self, user_id: str, limit: int, offset: int) -> Sequence[BalanceLog]:
        stmt = (
            select(BalanceLog)
            .where(BalanceLog.user_id == user_id)
            .order_by(desc(BalanceLog.timestamp))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

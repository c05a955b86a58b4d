"""SQLAlchemy implementation for the transaction record store"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update

from topup_server.db.models import Transaction, utcnow
from topup_server.modules.common.repository import AsyncRepository

SUCCESS = "success"


class SqlTransactionRepository(AsyncRepository[Transaction]):
    async def create(
        self,
        *,
        order_id: str,
        user_id: str,
        service_id: str | None,
        service_name: str | None,
        amount: int,
    ) -> Transaction:
        transaction = Transaction(
            order_id=order_id,
            user_id=user_id,
            service_id=service_id,
            service_name=service_name,
            amount=amount,
            status="pending",
        )
        return await self.add(transaction)

    async def get_by_order_id(self, order_id: str) -> Transaction | None:
        stmt = (
            select(Transaction)
            .where(Transaction.order_id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update_status(self, order_id: str, *, status: str, payload: str | None) -> bool:
        stmt = (
            update(Transaction)
            .where(Transaction.order_id == order_id)
            .values(status=status, gateway_response_payload=payload, updated_at=utcnow())
        )
        return await self.execute_update(stmt) > 0

    async def update_status_unless_success(self, order_id: str, *, status: str, payload: str | None) -> bool:
        stmt = (
            update(Transaction)
            .where(Transaction.order_id == order_id, Transaction.status != SUCCESS)
            .values(status=status, gateway_response_payload=payload, updated_at=utcnow())
        )
        return await self.execute_update(stmt) == 1

    async def transition_to_success(self, order_id: str, *, payload: str | None) -> bool:
        """Move the row into ``success`` unless it is already there.

        The ``status != 'success'`` predicate is evaluated under the row lock taken
        by the UPDATE, so concurrent callers cannot both see a matched row.
        """
        stmt = (
            update(Transaction)
            .where(Transaction.order_id == order_id, Transaction.status != SUCCESS)
            .values(status=SUCCESS, gateway_response_payload=payload, updated_at=utcnow())
        )
        return await self.execute_update(stmt) == 1

    async def record_payload(self, order_id: str, *, payload: str | None) -> bool:
        stmt = (
            update(Transaction)
            .where(Transaction.order_id == order_id)
            .values(gateway_response_payload=payload, updated_at=utcnow())
        )
        return await self.execute_update(stmt) > 0

    async def list_for_user(
        self,
        user_id: str,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> Sequence[Transaction]:
        stmt = select(Transaction).where(Transaction.user_id == user_id)
        if status and status != "all":
            stmt = stmt.where(Transaction.status == status)
        stmt = stmt.order_by(desc(Transaction.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

"""Transaction record store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.db.models import Transaction as TransactionModel
from topup_server.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository
from topup_server.modules.common.exceptions import InvalidAmountError, PersistenceError

from .exceptions import DuplicateOrderIdError, TransactionNotFoundError
from .models import Transaction, TransactionStatus
from .repository import TransactionRepository


def _dump_payload(payload: Optional[dict[str, Any]]) -> str | None:
    if payload is None:
        return None
    return json.dumps(payload, ensure_ascii=False, default=str)


def _load_payload(raw: str | None) -> Optional[dict[str, Any]]:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}
    return data if isinstance(data, dict) else {"raw": data}


@dataclass(slots=True)
class TransactionStore:
    repository: TransactionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionStore":
        return cls(SqlTransactionRepository(session))

    async def create(
        self,
        *,
        order_id: str,
        user_id: str,
        service_id: str | None,
        service_name: str | None,
        amount: int,
    ) -> Transaction:
        if amount <= 0:
            raise InvalidAmountError(f"Transaction amount must be positive: {amount}")
        existing = await self.repository.get_by_order_id(order_id)
        if existing is not None:
            raise DuplicateOrderIdError(order_id)
        try:
            model = await self.repository.create(
                order_id=order_id,
                user_id=user_id,
                service_id=service_id,
                service_name=service_name,
                amount=amount,
            )
        except IntegrityError as exc:
            raise DuplicateOrderIdError(order_id) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to create transaction {order_id}") from exc
        return self._to_domain(model)

    async def find_by_order_id(self, order_id: str) -> Transaction | None:
        try:
            model = await self.repository.get_by_order_id(order_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load transaction {order_id}") from exc
        return self._to_domain(model) if model else None

    async def get_by_order_id(self, order_id: str) -> Transaction:
        transaction = await self.find_by_order_id(order_id)
        if transaction is None:
            raise TransactionNotFoundError(order_id)
        return transaction

    async def update_status(
        self,
        order_id: str,
        status: TransactionStatus | str,
        payload: Optional[dict[str, Any]],
    ) -> None:
        status = TransactionStatus(status)
        try:
            updated = await self.repository.update_status(
                order_id,
                status=status.value,
                payload=_dump_payload(payload),
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update transaction {order_id}") from exc
        if not updated:
            raise TransactionNotFoundError(order_id)

    async def update_status_unless_success(
        self,
        order_id: str,
        status: TransactionStatus | str,
        payload: Optional[dict[str, Any]],
    ) -> bool:
        """Like :meth:`update_status` but never moves an order out of ``success``."""
        status = TransactionStatus(status)
        try:
            return await self.repository.update_status_unless_success(
                order_id,
                status=status.value,
                payload=_dump_payload(payload),
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update transaction {order_id}") from exc

    async def transition_to_success(self, order_id: str, payload: Optional[dict[str, Any]]) -> bool:
        """Return ``True`` only for the caller that moved the order into success."""
        try:
            return await self.repository.transition_to_success(order_id, payload=_dump_payload(payload))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update transaction {order_id}") from exc

    async def record_payload(self, order_id: str, payload: Optional[dict[str, Any]]) -> None:
        try:
            await self.repository.record_payload(order_id, payload=_dump_payload(payload))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update transaction {order_id}") from exc

    async def list_for_user(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        status: str | None = None,
    ) -> list[Transaction]:
        try:
            rows = await self.repository.list_for_user(user_id, limit, offset, status)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list transactions of user {user_id}") from exc
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            order_id=model.order_id,
            user_id=model.user_id,
            service_id=model.service_id,
            service_name=model.service_name,
            amount=model.amount,
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
            gateway_response_payload=_load_payload(model.gateway_response_payload),
        )

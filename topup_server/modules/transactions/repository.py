"""Repository interface for transaction records."""

from __future__ import annotations

from typing import Protocol, Sequence

from topup_server.db.models import Transaction as TransactionModel


class TransactionRepository(Protocol):
    async def create(
        self,
        *,
        order_id: str,
        user_id: str,
        service_id: str | None,
        service_name: str | None,
        amount: int,
    ) -> TransactionModel:
        ...

    async def get_by_order_id(self, order_id: str) -> TransactionModel | None:
        ...

    async def update_status(self, order_id: str, *, status: str, payload: str | None) -> bool:
        ...

    async def update_status_unless_success(self, order_id: str, *, status: str, payload: str | None) -> bool:
        ...

    async def transition_to_success(self, order_id: str, *, payload: str | None) -> bool:
        ...

    async def record_payload(self, order_id: str, *, payload: str | None) -> bool:
        ...

    async def list_for_user(
        self,
        user_id: str,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> Sequence[TransactionModel]:
        ...

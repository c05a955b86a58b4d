"""Repository protocol for the balance ledger."""

from __future__ import annotations

from typing import Protocol, Sequence

from topup_server.db.models import BalanceLog as BalanceLogModel


class LedgerRepository(Protocol):
    async def read_balance_for_update(self, user_id: str) -> tuple[int, int] | None:
        ...

    async def compare_and_set_balance(
        self,
        user_id: str,
        *,
        expected_version: int,
        new_balance: int,
    ) -> bool:
        ...

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
    ) -> BalanceLogModel:
        ...

    async def list_logs(self, user_id: str, limit: int, offset: int) -> Sequence[BalanceLogModel]:
        ...

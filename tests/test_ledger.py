"""
Balance ledger tests: arithmetic, floor, validation, audit trail and CAS retries.
"""
from dataclasses import dataclass, field
from typing import Any

import pytest

from topup_server.modules.common import InvalidAmountError, PersistenceError
from topup_server.modules.ledger import (
    BalanceAction,
    BalanceLedger,
    InvalidActionError,
    compute_new_balance,
)
from topup_server.modules.users import UserNotFoundError, UserService


class TestComputeNewBalance:
    """Pure balance arithmetic."""

    def test_add(self) -> None:
        assert compute_new_balance(BalanceAction.ADD, 1000, 250) == 1250

    def test_set(self) -> None:
        assert compute_new_balance(BalanceAction.SET, 1000, 0) == 0
        assert compute_new_balance(BalanceAction.SET, 0, 777) == 777

    @pytest.mark.parametrize(
        "previous, amount, expected",
        [(1000, 300, 700), (1000, 1000, 0), (1000, 5000, 0), (0, 1, 0), (500, -200, 300)],
    )
    def test_subtract_is_clamped_at_zero(self, previous: int, amount: int, expected: int) -> None:
        assert compute_new_balance(BalanceAction.SUBTRACT, previous, amount) == expected

    def test_subtract_never_negative(self) -> None:
        for previous in (0, 1, 99, 10_000):
            for amount in (0, 1, 100, 10_001):
                assert compute_new_balance(BalanceAction.SUBTRACT, previous, amount) >= 0

    @pytest.mark.parametrize("action", [BalanceAction.ADD, BalanceAction.SET])
    def test_negative_amount_rejected(self, action: BalanceAction) -> None:
        with pytest.raises(InvalidAmountError):
            compute_new_balance(action, 100, -1)


class TestBalanceLedger:
    """Ledger apply against the database."""

    @pytest.mark.asyncio
    async def test_add_persists_balance_and_log(self, session, create_user) -> None:
        await create_user("u1", balance=1000)
        ledger = BalanceLedger.with_session(session)

        change = await ledger.apply("u1", 500, "add", reason="Bonus", order_id="topup-9")
        await session.commit()

        assert (change.previous_balance, change.new_balance) == (1000, 1500)
        assert change.delta == 500
        assert await UserService.with_session(session).get_balance("u1") == 1500

        logs = await ledger.list_logs("u1")
        assert len(logs) == 1
        entry = logs[0]
        assert entry.action == "add"
        assert entry.amount == 500
        assert entry.reason == "Bonus"
        assert entry.order_id == "topup-9"
        assert (entry.previous_balance, entry.new_balance) == (1000, 1500)

    @pytest.mark.asyncio
    async def test_subtract_clamps_and_logs_magnitude(self, session, create_user) -> None:
        await create_user("u1", balance=300)
        ledger = BalanceLedger.with_session(session)

        change = await ledger.apply("u1", -1000, BalanceAction.SUBTRACT, reason="Correction")

        assert change.new_balance == 0
        assert change.log_entry.amount == 1000
        assert change.log_entry.previous_balance == 300

    @pytest.mark.asyncio
    async def test_set_overrides_balance(self, session, create_user) -> None:
        await create_user("u1", balance=300)
        ledger = BalanceLedger.with_session(session)

        change = await ledger.apply("u1", 42, "set")

        assert (change.previous_balance, change.new_balance) == (300, 42)

    @pytest.mark.asyncio
    async def test_log_chain_is_consistent(self, session, create_user) -> None:
        await create_user("u1")
        ledger = BalanceLedger.with_session(session)

        await ledger.apply("u1", 100, "add")
        await ledger.apply("u1", 30, "subtract")
        await ledger.apply("u1", 1000, "set")
        await ledger.apply("u1", 5000, "subtract")
        await session.commit()

        logs = await ledger.list_logs("u1", limit=10)
        assert len(logs) == 4
        for entry in logs:
            expected = compute_new_balance(BalanceAction(entry.action), entry.previous_balance, entry.amount)
            assert entry.new_balance == expected
        assert await UserService.with_session(session).get_balance("u1") == 0

    @pytest.mark.asyncio
    async def test_unknown_user(self, session) -> None:
        ledger = BalanceLedger.with_session(session)
        with pytest.raises(UserNotFoundError):
            await ledger.apply("ghost", 10, "add")

    @pytest.mark.asyncio
    async def test_invalid_action(self, session, create_user) -> None:
        await create_user("u1")
        ledger = BalanceLedger.with_session(session)
        with pytest.raises(InvalidActionError):
            await ledger.apply("u1", 10, "multiply")

    @pytest.mark.asyncio
    async def test_negative_add_leaves_no_trace(self, session, create_user) -> None:
        await create_user("u1", balance=100)
        ledger = BalanceLedger.with_session(session)

        with pytest.raises(InvalidAmountError):
            await ledger.apply("u1", -5, "add")

        assert await ledger.list_logs("u1") == []
        assert await UserService.with_session(session).get_balance("u1") == 100


@dataclass
class FlakyLedgerRepository:
    """In-memory repository whose first CAS attempts lose a race."""

    balance: int
    lost_races: int
    version: int = 0
    logs: list[dict[str, Any]] = field(default_factory=list)

    async def read_balance_for_update(self, user_id: str) -> tuple[int, int] | None:
        return self.balance, self.version

    async def compare_and_set_balance(self, user_id: str, *, expected_version: int, new_balance: int) -> bool:
        if self.lost_races:
            self.lost_races -= 1
            # another writer got there first
            self.balance += 10
            self.version += 1
            return False
        assert expected_version == self.version
        self.balance = new_balance
        self.version += 1
        return True

    async def add_log(self, **values: Any) -> Any:
        self.logs.append(values)
        return _LogRow(id=f"log-{len(self.logs)}", timestamp=None, **values)

    async def list_logs(self, user_id: str, limit: int, offset: int) -> list[Any]:
        return []


@dataclass
class _LogRow:
    id: str
    user_id: str
    amount: int
    action: str
    reason: Any
    order_id: Any
    previous_balance: int
    new_balance: int
    timestamp: Any


class TestCompareAndSwap:
    """Optimistic concurrency on the user balance."""

    @pytest.mark.asyncio
    async def test_lost_race_rereads_balance(self) -> None:
        repository = FlakyLedgerRepository(balance=100, lost_races=2)
        ledger = BalanceLedger(repository, max_attempts=5)

        change = await ledger.apply("u1", 50, "add")

        # two concurrent +10 writes landed before ours
        assert change.previous_balance == 120
        assert change.new_balance == 170
        assert repository.balance == 170
        assert len(repository.logs) == 1
        assert repository.logs[0]["previous_balance"] == 120

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self) -> None:
        repository = FlakyLedgerRepository(balance=100, lost_races=3)
        ledger = BalanceLedger(repository, max_attempts=3)

        with pytest.raises(PersistenceError):
            await ledger.apply("u1", 50, "add")
        assert repository.logs == []

"""Base class for SQLAlchemy-backed repositories."""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import Update
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def add(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def execute_update(self, stmt: Update) -> int:
        """Run a bulk UPDATE and return the number of matched rows.

        The identity map is left alone; reads that must see the new values use
        ``populate_existing``.
        """
        result = await self.session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

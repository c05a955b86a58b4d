"""Domain services for user records."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.db.models import User as UserModel
from topup_server.infrastructure.database.repositories.user_repository import SqlUserRepository

from .exceptions import UserAlreadyExistsError, UserNotFoundError
from .models import User, UserCreateInput
from .repository import UserRepository


@dataclass(slots=True)
class UserService:
    repository: UserRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        return cls(SqlUserRepository(session))

    async def get_balance(self, user_id: str) -> int:
        """Read-through query against the materialized balance."""
        model = await self.repository.get_by_id(user_id)
        if model is None:
            raise UserNotFoundError(user_id)
        return model.balance

    async def create_user(self, payload: UserCreateInput) -> User:
        existing = await self.repository.get_by_id(payload.id)
        if existing is not None:
            raise UserAlreadyExistsError(payload.id)
        model = await self.repository.create_user(
            user_id=payload.id,
            email=payload.email,
            display_name=payload.display_name,
            role=payload.role,
        )
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            role=model.role,
            balance=model.balance,
            email=model.email,
            display_name=model.display_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

"""SQLAlchemy implementation for user repository"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from topup_server.db.models import User
from topup_server.modules.common.repository import AsyncRepository


class SqlUserRepository(AsyncRepository[User]):
    async def get_by_id(self, user_id: str) -> User | None:
        stmt = select(User).where(User.id == user_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create_user(
        self,
        *,
        user_id: str,
        email: str | None,
        display_name: str | None,
        role: str,
    ) -> User:
        user = User(
            id=user_id,
            email=email,
            display_name=display_name,
            role=role,
            balance=0,
            balance_version=0,
        )
        try:
            await self.add(user)
        except IntegrityError:
            await self.session.rollback()
            user = await self.get_by_id(user_id)
            if user is None:
                raise
        return user

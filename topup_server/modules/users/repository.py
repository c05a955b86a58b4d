"""Repository protocol for users."""

from __future__ import annotations

from typing import Protocol

from topup_server.db.models import User as UserModel


class UserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> UserModel | None:
        ...

    async def create_user(
        self,
        *,
        user_id: str,
        email: str | None,
        display_name: str | None,
        role: str,
    ) -> UserModel:
        ...

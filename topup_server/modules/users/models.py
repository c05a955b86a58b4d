"""Domain models for users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class User:
    id: str
    role: str
    balance: int
    email: Optional[str] = None
    display_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(slots=True)
class UserCreateInput:
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: str = "user"

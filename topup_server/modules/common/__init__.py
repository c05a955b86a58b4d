"""Shared abstractions used across feature modules."""

from .exceptions import InvalidAmountError, PersistenceError
from .repository import AsyncRepository

__all__ = ["AsyncRepository", "InvalidAmountError", "PersistenceError"]

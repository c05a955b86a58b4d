"""User domain exports"""

from .exceptions import UserAlreadyExistsError, UserError, UserNotFoundError
from .models import User, UserCreateInput
from .service import UserService

__all__ = [
    "User",
    "UserCreateInput",
    "UserService",
    "UserError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]

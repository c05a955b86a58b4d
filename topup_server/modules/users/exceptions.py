"""User domain specific exceptions."""


class UserError(Exception):
    """Base class for user domain errors."""


class UserNotFoundError(UserError):
    """Raised when the referenced user does not exist."""


class UserAlreadyExistsError(UserError):
    """Raised when seeding a user whose id is already taken."""

"""Errors shared by more than one module."""


class PersistenceError(Exception):
    """Raised when the backing store fails to read or write."""


class InvalidAmountError(ValueError):
    """Raised when a monetary amount is outside the accepted range."""

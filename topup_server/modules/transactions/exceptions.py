"""Transaction record specific exceptions."""


class TransactionError(Exception):
    """Base class for transaction record errors."""


class TransactionNotFoundError(TransactionError):
    """Raised when no transaction exists for an order id."""


class DuplicateOrderIdError(TransactionError):
    """Raised when creating a transaction whose order id is already used."""

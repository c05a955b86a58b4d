"""Ledger specific exceptions."""

from topup_server.modules.common.exceptions import InvalidAmountError


class InvalidActionError(ValueError):
    """Raised when a balance action is not one of add, subtract or set."""


__all__ = ["InvalidActionError", "InvalidAmountError"]

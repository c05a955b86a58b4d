"""Checkout and payment gateway errors."""


class CheckoutError(Exception):
    """Base class for checkout errors."""


class GatewayUnavailableError(CheckoutError):
    """Raised when the gateway cannot be reached or rejects the request."""


class GatewayNotConfiguredError(CheckoutError):
    """Raised when no gateway server key is configured."""

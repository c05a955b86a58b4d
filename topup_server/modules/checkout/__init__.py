"""Checkout exports"""

from .exceptions import CheckoutError, GatewayNotConfiguredError, GatewayUnavailableError
from .gateway import MidtransSnapClient
from .models import CheckoutInput, CheckoutSession, SnapTransaction
from .service import CheckoutService, build_snap_parameter

__all__ = [
    "CheckoutError",
    "CheckoutInput",
    "CheckoutService",
    "CheckoutSession",
    "GatewayNotConfiguredError",
    "GatewayUnavailableError",
    "MidtransSnapClient",
    "SnapTransaction",
    "build_snap_parameter",
]

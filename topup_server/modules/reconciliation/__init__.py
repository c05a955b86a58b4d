"""Reconciliation exports"""

from .models import ReconciliationResult
from .service import ReconciliationEngine
from .status import map_gateway_status

__all__ = ["ReconciliationEngine", "ReconciliationResult", "map_gateway_status"]

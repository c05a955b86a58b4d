"""Mapping from gateway transaction states to internal statuses."""

from __future__ import annotations

from typing import Optional

from topup_server.modules.transactions.models import TransactionStatus

FAILED_GATEWAY_STATUSES = frozenset({"cancel", "deny", "expire"})


def map_gateway_status(transaction_status: str, fraud_status: Optional[str] = None) -> TransactionStatus:
    """Total mapping; anything unrecognised stays ``pending``."""
    transaction_status = (transaction_status or "").lower()
    fraud_status = (fraud_status or "").lower()

    if transaction_status == "capture":
        if fraud_status == "accept":
            return TransactionStatus.SUCCESS
        if fraud_status == "challenge":
            return TransactionStatus.CHALLENGE
        return TransactionStatus.PENDING
    if transaction_status == "settlement":
        return TransactionStatus.SUCCESS
    if transaction_status in FAILED_GATEWAY_STATUSES:
        return TransactionStatus.FAILED
    return TransactionStatus.PENDING

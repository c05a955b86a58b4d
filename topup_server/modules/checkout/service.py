"""Checkout initiation: Snap token creation and pending transaction seeding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from topup_server.modules.common.exceptions import InvalidAmountError
from topup_server.modules.transactions.exceptions import DuplicateOrderIdError
from topup_server.modules.transactions.service import TransactionStore

from .gateway import MidtransSnapClient
from .models import CheckoutInput, CheckoutSession

logger = logging.getLogger(__name__)


def build_snap_parameter(payload: CheckoutInput) -> dict[str, Any]:
    parameter: dict[str, Any] = {
        "transaction_details": {
            "order_id": payload.order_id,
            "gross_amount": payload.amount,
        },
        "credit_card": {"secure": True},
    }
    if payload.customer_details:
        parameter["customer_details"] = payload.customer_details
    if payload.item_details:
        parameter["item_details"] = payload.item_details
    return parameter


@dataclass(slots=True)
class CheckoutService:
    gateway: MidtransSnapClient
    transactions: TransactionStore

    async def initiate(self, payload: CheckoutInput) -> CheckoutSession:
        if payload.amount <= 0:
            raise InvalidAmountError(f"Amount must be positive: {payload.amount}")
        if payload.user_id and await self.transactions.find_by_order_id(payload.order_id):
            raise DuplicateOrderIdError(payload.order_id)

        snap = await self.gateway.create_transaction(build_snap_parameter(payload))
        logger.info("Snap transaction created for order %s", payload.order_id)

        session = CheckoutSession(token=snap.token, redirect_url=snap.redirect_url)
        if payload.user_id:
            session.transaction = await self.transactions.create(
                order_id=payload.order_id,
                user_id=payload.user_id,
                service_id=payload.service_id,
                service_name=payload.service_name,
                amount=payload.amount,
            )
        return session

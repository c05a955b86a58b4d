"""
Snap gateway client and checkout service tests.
"""
import base64
import json

import httpx
import pytest

from topup_server.modules.checkout import (
    CheckoutInput,
    CheckoutService,
    GatewayNotConfiguredError,
    GatewayUnavailableError,
    MidtransSnapClient,
    build_snap_parameter,
)
from topup_server.modules.common import InvalidAmountError
from topup_server.modules.transactions import DuplicateOrderIdError, TransactionStore

SERVER_KEY = "SB-Mid-server-test-key"


def checkout_input(**overrides) -> CheckoutInput:
    values = dict(
        order_id="topup-1",
        amount=50000,
        customer_details={"first_name": "Budi", "email": "budi@example.com"},
        item_details=[{"id": "svc-50k", "price": 50000, "quantity": 1, "name": "Top up 50K"}],
    )
    values.update(overrides)
    return CheckoutInput(**values)


class TestSnapParameter:
    def test_minimal(self) -> None:
        parameter = build_snap_parameter(CheckoutInput(order_id="o-1", amount=1000))
        assert parameter == {
            "transaction_details": {"order_id": "o-1", "gross_amount": 1000},
            "credit_card": {"secure": True},
        }

    def test_details_passed_through(self) -> None:
        parameter = build_snap_parameter(checkout_input())
        assert parameter["customer_details"]["email"] == "budi@example.com"
        assert parameter["item_details"][0]["id"] == "svc-50k"


class TestSnapClient:
    @pytest.mark.asyncio
    async def test_create_transaction(self, snap_client, snap_handler) -> None:
        snap = await snap_client.create_transaction(build_snap_parameter(checkout_input()))

        assert snap.token == "snap-token-123"
        assert snap.redirect_url.endswith("snap-token-123")

        request = snap_handler["requests"][0]
        assert request.method == "POST"
        assert request.url.path == "/snap/v1/transactions"
        expected_auth = base64.b64encode(f"{SERVER_KEY}:".encode()).decode()
        assert request.headers["authorization"] == f"Basic {expected_auth}"
        assert json.loads(request.content)["transaction_details"]["order_id"] == "topup-1"

    @pytest.mark.asyncio
    async def test_gateway_rejection(self, snap_client, snap_handler) -> None:
        snap_handler["handler"] = lambda request: httpx.Response(401, json={"error_messages": ["Access denied"]})
        with pytest.raises(GatewayUnavailableError):
            await snap_client.create_transaction(build_snap_parameter(checkout_input()))

    @pytest.mark.asyncio
    async def test_network_failure(self, snap_client, snap_handler) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        snap_handler["handler"] = refuse
        with pytest.raises(GatewayUnavailableError):
            await snap_client.create_transaction(build_snap_parameter(checkout_input()))

    @pytest.mark.asyncio
    async def test_response_without_token(self, snap_client, snap_handler) -> None:
        snap_handler["handler"] = lambda request: httpx.Response(201, json={"status": "ok"})
        with pytest.raises(GatewayUnavailableError):
            await snap_client.create_transaction(build_snap_parameter(checkout_input()))

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        client = MidtransSnapClient(server_key=None, base_url="https://app.sandbox.midtrans.com")
        with pytest.raises(GatewayNotConfiguredError):
            await client.create_transaction(build_snap_parameter(checkout_input()))


class TestCheckoutService:
    @pytest.mark.asyncio
    async def test_anonymous_checkout_stores_nothing(self, session, snap_client) -> None:
        service = CheckoutService(gateway=snap_client, transactions=TransactionStore.with_session(session))

        result = await service.initiate(checkout_input())

        assert result.token == "snap-token-123"
        assert result.transaction is None
        assert await TransactionStore.with_session(session).find_by_order_id("topup-1") is None

    @pytest.mark.asyncio
    async def test_checkout_seeds_pending_transaction(self, session, snap_client) -> None:
        service = CheckoutService(gateway=snap_client, transactions=TransactionStore.with_session(session))

        result = await service.initiate(
            checkout_input(user_id="u1", service_id="svc-50k", service_name="Top up 50K")
        )

        assert result.transaction is not None
        stored = await TransactionStore.with_session(session).get_by_order_id("topup-1")
        assert stored.status == "pending"
        assert stored.user_id == "u1"
        assert stored.amount == 50000

    @pytest.mark.asyncio
    async def test_duplicate_order_skips_gateway(self, session, snap_client, snap_handler, create_transaction) -> None:
        await create_transaction("topup-1")
        service = CheckoutService(gateway=snap_client, transactions=TransactionStore.with_session(session))

        with pytest.raises(DuplicateOrderIdError):
            await service.initiate(checkout_input(user_id="u1"))
        assert snap_handler["requests"] == []

    @pytest.mark.asyncio
    async def test_gateway_failure_stores_nothing(self, session, snap_client, snap_handler) -> None:
        snap_handler["handler"] = lambda request: httpx.Response(500, text="boom")
        service = CheckoutService(gateway=snap_client, transactions=TransactionStore.with_session(session))

        with pytest.raises(GatewayUnavailableError):
            await service.initiate(checkout_input(user_id="u1"))
        assert await TransactionStore.with_session(session).find_by_order_id("topup-1") is None

    @pytest.mark.asyncio
    async def test_non_positive_amount(self, session, snap_client) -> None:
        service = CheckoutService(gateway=snap_client, transactions=TransactionStore.with_session(session))
        with pytest.raises(InvalidAmountError):
            await service.initiate(checkout_input(amount=0))

"""Payment gateway notification endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.api.deps import get_db_session, get_notification_verifier, get_reconciliation_engine
from topup_server.modules.common import PersistenceError
from topup_server.modules.notifications import (
    InvalidSignatureError,
    MalformedPayloadError,
    MissingFieldsError,
    NotificationVerifier,
)
from topup_server.modules.reconciliation import ReconciliationEngine
from topup_server.modules.transactions import TransactionNotFoundError
from topup_server.schemas import WebhookHealthResponse, WebhookResponse

logger = logging.getLogger(__name__)


async def receive_notification(
    request: Request,
    verifier: NotificationVerifier = Depends(get_notification_verifier),
    engine: ReconciliationEngine = Depends(get_reconciliation_engine),
    db: AsyncSession = Depends(get_db_session),
) -> WebhookResponse:
    body = await request.body()
    content_type = request.headers.get("content-type")
    logger.debug("Gateway notification received (content-type=%s)", content_type)

    try:
        notification = verifier.verify_request(content_type, body)
    except (MalformedPayloadError, MissingFieldsError) as exc:
        logger.info("Rejected gateway notification: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except InvalidSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    try:
        result = await engine.reconcile(notification)
        await db.commit()
    except TransactionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found") from exc
    except (PersistenceError, SQLAlchemyError) as exc:
        logger.exception("Database error while reconciling order %s", notification.order_id)
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc

    return WebhookResponse(
        message="Webhook processed successfully",
        order_id=result.order_id,
        status=result.status,
    )


async def webhook_health() -> WebhookHealthResponse:
    return WebhookHealthResponse(
        message="Midtrans webhook endpoint is working",
        timestamp=datetime.now(timezone.utc),
    )


def create_webhook_router(path: str) -> APIRouter:
    router = APIRouter()
    router.add_api_route(path, receive_notification, methods=["POST"], response_model=WebhookResponse)
    router.add_api_route(path, webhook_health, methods=["GET"], response_model=WebhookHealthResponse)
    return router


__all__ = ["create_webhook_router", "receive_notification", "webhook_health"]

"""Checkout initiation endpoint consumed by the web client."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.api.deps import get_checkout_service, get_db_session
from topup_server.core.security import ensure_can_access, get_optional_principal
from topup_server.modules.checkout import (
    CheckoutInput,
    CheckoutService,
    GatewayNotConfiguredError,
    GatewayUnavailableError,
)
from topup_server.modules.common import InvalidAmountError, PersistenceError
from topup_server.modules.transactions import DuplicateOrderIdError
from topup_server.schemas import CheckoutRequest, CheckoutResponse, TokenData

router = APIRouter()


@router.post("", response_model=CheckoutResponse, summary="Create a Snap payment token")
async def create_checkout(
    payload: CheckoutRequest,
    principal: Optional[TokenData] = Depends(get_optional_principal),
    service: CheckoutService = Depends(get_checkout_service),
    db: AsyncSession = Depends(get_db_session),
) -> CheckoutResponse:
    if payload.user_id:
        # only the named user or an admin may seed a transaction
        if principal is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        ensure_can_access(principal, payload.user_id)

    try:
        session = await service.initiate(
            CheckoutInput(
                order_id=payload.order_id,
                amount=payload.amount,
                customer_details=payload.customer_details,
                item_details=payload.item_details,
                user_id=payload.user_id,
                service_id=payload.service_id,
                service_name=payload.service_name,
            )
        )
        await db.commit()
    except InvalidAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DuplicateOrderIdError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Order id already exists") from exc
    except GatewayNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except GatewayUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to create transaction") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc

    return CheckoutResponse(token=session.token, redirect_url=session.redirect_url)

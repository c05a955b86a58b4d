"""Transaction record endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.api.deps import get_db_session, get_transaction_store
from topup_server.core.security import ensure_can_access, get_current_principal
from topup_server.modules.common import InvalidAmountError, PersistenceError
from topup_server.modules.transactions import (
    DuplicateOrderIdError,
    Transaction,
    TransactionNotFoundError,
    TransactionStore,
)
from topup_server.schemas import TokenData, TransactionCreateRequest, TransactionResponse

router = APIRouter()


def transaction_to_response(transaction: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=transaction.id,
        order_id=transaction.order_id,
        user_id=transaction.user_id,
        service_id=transaction.service_id,
        service_name=transaction.service_name,
        amount=transaction.amount,
        status=transaction.status,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a pending payment attempt",
)
async def create_transaction(
    payload: TransactionCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    store: TransactionStore = Depends(get_transaction_store),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionResponse:
    try:
        transaction = await store.create(
            order_id=payload.order_id,
            user_id=principal.subject,
            service_id=payload.service_id,
            service_name=payload.service_name,
            amount=payload.amount,
        )
        await db.commit()
    except InvalidAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DuplicateOrderIdError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Order id already exists") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc
    return transaction_to_response(transaction)


@router.get("/{order_id}", response_model=TransactionResponse, summary="Look up a payment attempt")
async def get_transaction(
    order_id: str,
    principal: TokenData = Depends(get_current_principal),
    store: TransactionStore = Depends(get_transaction_store),
) -> TransactionResponse:
    try:
        transaction = await store.get_by_order_id(order_id)
    except TransactionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found") from exc
    ensure_can_access(principal, transaction.user_id)
    return transaction_to_response(transaction)

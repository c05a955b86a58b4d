"""Read-through balance and history queries for a user."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from topup_server.api.deps import get_balance_ledger, get_transaction_store, get_user_service
from topup_server.core.security import ensure_can_access, get_current_principal
from topup_server.modules.common import PersistenceError
from topup_server.modules.ledger import BalanceLedger
from topup_server.modules.transactions import TransactionStore
from topup_server.modules.users import UserNotFoundError, UserService
from topup_server.schemas import (
    BalanceLogListResponse,
    BalanceLogResponse,
    BalanceResponse,
    TokenData,
    TransactionListResponse,
)

from .transactions import transaction_to_response

router = APIRouter()


@router.get("/{user_id}/balance", response_model=BalanceResponse, summary="Current balance")
async def get_balance(
    user_id: str,
    principal: TokenData = Depends(get_current_principal),
    users: UserService = Depends(get_user_service),
) -> BalanceResponse:
    ensure_can_access(principal, user_id)
    try:
        balance = await users.get_balance(user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    return BalanceResponse(user_id=user_id, balance=balance)


@router.get("/{user_id}/balance-logs", response_model=BalanceLogListResponse, summary="Balance history")
async def list_balance_logs(
    user_id: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    principal: TokenData = Depends(get_current_principal),
    ledger: BalanceLedger = Depends(get_balance_ledger),
) -> BalanceLogListResponse:
    ensure_can_access(principal, user_id)
    try:
        entries = await ledger.list_logs(user_id, limit, offset)
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc
    return BalanceLogListResponse(
        logs=[
            BalanceLogResponse(
                id=entry.id,
                user_id=entry.user_id,
                amount=entry.amount,
                action=entry.action,
                reason=entry.reason,
                order_id=entry.order_id,
                previous_balance=entry.previous_balance,
                new_balance=entry.new_balance,
                timestamp=entry.timestamp,
            )
            for entry in entries
        ]
    )


@router.get("/{user_id}/transactions", response_model=TransactionListResponse, summary="Payment history")
async def list_user_transactions(
    user_id: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: TokenData = Depends(get_current_principal),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> TransactionListResponse:
    ensure_can_access(principal, user_id)
    try:
        rows = await transactions.list_for_user(user_id, limit, offset, status_filter)
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc
    return TransactionListResponse(transactions=[transaction_to_response(row) for row in rows])

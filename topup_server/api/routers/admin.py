"""Administrative balance adjustment."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from topup_server.api.deps import get_balance_ledger, get_db_session
from topup_server.core.security import get_current_admin
from topup_server.modules.common import InvalidAmountError, PersistenceError
from topup_server.modules.ledger import BalanceLedger, InvalidActionError
from topup_server.modules.users import UserNotFoundError
from topup_server.schemas import BalanceAdjustmentRequest, BalanceAdjustmentResponse, TokenData

router = APIRouter()


@router.post("/balance", response_model=BalanceAdjustmentResponse, summary="Adjust a user balance")
async def adjust_balance(
    payload: BalanceAdjustmentRequest,
    _: TokenData = Depends(get_current_admin),
    ledger: BalanceLedger = Depends(get_balance_ledger),
    db: AsyncSession = Depends(get_db_session),
) -> BalanceAdjustmentResponse:
    try:
        change = await ledger.apply(
            payload.user_id,
            payload.amount,
            payload.action,
            reason=payload.reason,
        )
        await db.commit()
    except (InvalidAmountError, InvalidActionError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error") from exc

    return BalanceAdjustmentResponse(
        previous_balance=change.previous_balance,
        new_balance=change.new_balance,
    )

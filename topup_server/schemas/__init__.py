"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, the web client's convention."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenData(BaseModel):
    subject: str
    role: str

    def is_admin(self) -> bool:
        return self.role == "admin"


class WebhookResponse(CamelModel):
    message: str
    order_id: str
    status: str


class WebhookHealthResponse(BaseModel):
    message: str
    timestamp: datetime


class CheckoutRequest(CamelModel):
    order_id: str = Field(..., min_length=1, max_length=100)
    amount: int = Field(..., gt=0)
    customer_details: dict[str, Any] = Field(default_factory=dict)
    item_details: list[dict[str, Any]] = Field(default_factory=list)
    user_id: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None


class CheckoutResponse(CamelModel):
    token: str
    redirect_url: str


class BalanceAdjustmentRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    amount: int
    action: Literal["add", "subtract", "set"] = "add"
    reason: str = "Manual update"


class BalanceAdjustmentResponse(CamelModel):
    success: bool = True
    previous_balance: int
    new_balance: int
    message: str = "Balance updated successfully"


class BalanceResponse(CamelModel):
    user_id: str
    balance: int


class BalanceLogResponse(CamelModel):
    id: str
    user_id: str
    amount: int
    action: str
    reason: Optional[str] = None
    order_id: Optional[str] = None
    previous_balance: int
    new_balance: int
    timestamp: Optional[datetime] = None


class BalanceLogListResponse(CamelModel):
    logs: list[BalanceLogResponse] = Field(default_factory=list)


class TransactionCreateRequest(CamelModel):
    order_id: str = Field(..., min_length=1, max_length=100)
    amount: int = Field(..., gt=0)
    service_id: Optional[str] = None
    service_name: Optional[str] = None


class TransactionResponse(CamelModel):
    id: str
    order_id: str
    user_id: str
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    amount: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionListResponse(CamelModel):
    transactions: list[TransactionResponse] = Field(default_factory=list)

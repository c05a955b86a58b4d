from fastapi import APIRouter

from topup_server.api.routers import admin, checkout, transactions, users
from topup_server.api.routers.webhook import create_webhook_router


def create_api_router(prefix: str = "", webhook_path: str = "/midtrans-webhook") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(create_webhook_router(webhook_path), tags=["webhook"])
    router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    return router


__all__ = [
    "create_api_router",
]

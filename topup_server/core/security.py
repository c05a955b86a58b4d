"""Bearer token helpers.

Tokens are minted by the external auth layer with the shared secret; this
service only verifies them. ``create_access_token`` exists for tooling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from topup_server.core.config import get_settings
from topup_server.schemas import TokenData

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def create_access_token(subject: str, role: str = "user", expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    payload = {
        "sub": subject,
        "role": role,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1)),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(subject=subject, role=role)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> TokenData:
    return decode_access_token(credentials.credentials)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[TokenData]:
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


async def get_current_admin(principal: TokenData = Depends(get_current_principal)) -> TokenData:
    if not principal.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator privileges required")
    return principal


def ensure_can_access(principal: TokenData, user_id: str) -> None:
    if principal.subject != user_id and not principal.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this user")

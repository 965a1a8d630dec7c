from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.errors import Unauthenticated
from sowplan.core.security import decode_token
from sowplan.db.session import get_db
from sowplan.models.user import User
from sowplan.services.user_service import get_user_by_id

__all__ = ["CurrentUser", "get_current_user", "get_db"]

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=Unauthenticated.status_code,
        detail=Unauthenticated.default_message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_id_from_token(token: str) -> int:
    try:
        payload = decode_token(token)
    except JWTError:
        raise _unauthenticated()
    if payload.get("type") != "access":
        raise _unauthenticated()
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthenticated()


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await get_user_by_id(db, _user_id_from_token(token))
    if user is None or not user.is_active:
        raise _unauthenticated()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]

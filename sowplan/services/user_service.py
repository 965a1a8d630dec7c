import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.security import hash_password
from sowplan.models.user import User
from sowplan.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    return await db.scalar(select(User).where(func.lower(User.email) == normalize_email(email)))


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=normalize_email(data.email),
        hashed_password=hash_password(data.password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("registered user %d", user.id)
    return user


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile update.

    Frost date changes are not pushed to existing crop plans; they take effect
    the next time a plan's tasks are regenerated.
    """
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(user, field, value)
    await db.commit()
    await db.refresh(user)

    if "last_frost_date" in changes:
        logger.info("user %d last frost date set to %s", user.id, changes["last_frost_date"])
    return user


async def record_login(db: AsyncSession, user: User) -> None:
    user.last_login = datetime.now(timezone.utc)
    await db.commit()

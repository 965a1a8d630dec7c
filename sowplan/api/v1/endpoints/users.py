from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.deps import CurrentUser, get_db
from sowplan.schemas.user import UserRead, UserUpdate
from sowplan.services.user_service import update_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_me(current_user: CurrentUser):
    return current_user


@router.patch("/me", response_model=UserRead)
async def patch_me(
    body: UserUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    return await update_user(db, current_user, body)

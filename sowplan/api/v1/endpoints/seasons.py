from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from sowplan.core.deps import CurrentUser, get_db
from sowplan.core.errors import TaskGenerationError
from sowplan.schemas.crop import SeasonGenerationResponse, TaskGenerationResponse
from sowplan.services.task_generation import regenerate_season_tasks

router = APIRouter(prefix="/seasons", tags=["seasons"])


@router.post("/{season_id}/generate-tasks", response_model=SeasonGenerationResponse)
async def generate_season_tasks(
    season_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    try:
        results = await regenerate_season_tasks(db, season_id, current_user, today=date.today())
    except TaskGenerationError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    return SeasonGenerationResponse(
        season_id=season_id,
        results=[
            TaskGenerationResponse(
                success=r.error is None,
                crop_plan_id=r.crop_plan_id,
                tasks_created=r.tasks_created,
                error=r.error,
            )
            for r in results
        ],
        tasks_created=sum(r.tasks_created for r in results),
    )

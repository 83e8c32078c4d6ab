"""Step endpoints - update and delete checklist steps."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.api.deps import get_current_user_id
from gamelive.db.database import get_db
from gamelive.schemas.quest import OkResponse, StepEnvelope, StepState, StepUpdate
from gamelive.services.quest_service import quest_service

router = APIRouter()


@router.patch("/{step_id}", response_model=StepEnvelope)
async def update_step(
    step_id: int,
    data: StepUpdate,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    step = await quest_service.patch_step(
        db, owner_id, step_id, data.model_dump(exclude_unset=True)
    )
    return StepEnvelope(step=StepState.model_validate(step))


@router.delete("/{step_id}", response_model=OkResponse)
async def delete_step(
    step_id: int,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await quest_service.delete_step(db, owner_id, step_id)
    return OkResponse()

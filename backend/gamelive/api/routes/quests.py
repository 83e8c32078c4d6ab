"""Quest endpoints - list, create, update, delete and complete quests."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.api.deps import get_current_user_id
from gamelive.api.routes.character import character_to_response
from gamelive.db.database import get_db
from gamelive.schemas.quest import (
    CompletionResponse,
    OkResponse,
    QuestCreate,
    QuestEnvelope,
    QuestList,
    QuestState,
    QuestUpdate,
    StepCreate,
    StepEnvelope,
    StepState,
)
from gamelive.services.lifecycle_service import quest_lifecycle
from gamelive.services.quest_service import quest_service

router = APIRouter()


@router.get("", response_model=QuestList)
async def list_quests(
    status: str = "active",
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """List the user's quests with the given status, newest first."""
    quests = await quest_service.list_quests(db, owner_id, status)
    return QuestList(items=[QuestState.model_validate(q) for q in quests])


@router.post("", response_model=QuestEnvelope)
async def create_quest(
    data: QuestCreate,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    quest = await quest_service.create_quest(db, owner_id, data.model_dump())
    return QuestEnvelope(quest=QuestState.model_validate(quest))


@router.patch("/{quest_id}", response_model=QuestEnvelope)
async def update_quest(
    quest_id: int,
    data: QuestUpdate,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the request body."""
    quest = await quest_service.patch_quest(
        db, owner_id, quest_id, data.model_dump(exclude_unset=True)
    )
    return QuestEnvelope(quest=QuestState.model_validate(quest))


@router.delete("/{quest_id}", response_model=OkResponse)
async def delete_quest(
    quest_id: int,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await quest_service.delete_quest(db, owner_id, quest_id)
    return OkResponse()


@router.post("/{quest_id}/complete", response_model=CompletionResponse)
async def complete_quest(
    quest_id: int,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Complete a quest: award xp, level up, spawn the next repeat."""
    result = await quest_lifecycle.complete_quest(db, owner_id, quest_id)
    return CompletionResponse(
        quest=QuestState.model_validate(result.quest),
        character=character_to_response(result.character),
        next_quest=QuestState.model_validate(result.next_quest) if result.next_quest else None,
    )


@router.post("/{quest_id}/steps", response_model=StepEnvelope)
async def add_step(
    quest_id: int,
    data: StepCreate,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    step = await quest_service.add_step(db, owner_id, quest_id, data.title)
    return StepEnvelope(step=StepState.model_validate(step))

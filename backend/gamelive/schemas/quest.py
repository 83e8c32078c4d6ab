"""Quest and step Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel

from gamelive.schemas.character import CharacterState


class StepDraft(BaseModel):
    """A step submitted with a new quest. Entries without a title are dropped."""
    title: str | None = None


class QuestCreate(BaseModel):
    title: str | None = None
    description: str | None = None
    xp_reward: int | None = None  # defaults to 10
    due_at: datetime | None = None
    repeat_type: str | None = None  # defaults to "none"
    repeat_interval: int | None = None
    steps: list[StepDraft] | None = None


class QuestUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""
    title: str | None = None
    description: str | None = None
    xp_reward: int | None = None
    due_at: datetime | None = None
    repeat_type: str | None = None
    repeat_interval: int | None = None
    status: str | None = None


class StepCreate(BaseModel):
    title: str | None = None


class StepUpdate(BaseModel):
    title: str | None = None
    is_done: bool | None = None


class StepState(BaseModel):
    id: int
    quest_id: int
    title: str
    is_done: bool
    order_index: int

    model_config = {"from_attributes": True}


class QuestState(BaseModel):
    id: int
    user_id: int
    character_id: int
    title: str
    description: str | None
    xp_reward: int
    status: str
    due_at: datetime | None
    repeat_type: str
    repeat_interval: int
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime
    steps: list[StepState] = []

    model_config = {"from_attributes": True}


class QuestList(BaseModel):
    items: list[QuestState]


class QuestEnvelope(BaseModel):
    quest: QuestState


class StepEnvelope(BaseModel):
    step: StepState


class CompletionResponse(BaseModel):
    quest: QuestState
    character: CharacterState
    next_quest: QuestState | None = None


class OkResponse(BaseModel):
    ok: bool = True

"""Character-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel


class CharacterSave(BaseModel):
    """Appearance fields; presence and ranges are checked by the service."""
    name: str | None = None
    age: int | None = None
    height_cm: int | None = None
    weight_kg: int | None = None
    hair_style: str | None = None
    hair_color: str | None = None
    outfit_top: str | None = None
    outfit_bottom: str | None = None
    outfit_shoes: str | None = None


class CharacterState(BaseModel):
    id: int
    user_id: int
    name: str
    age: int
    height_cm: int
    weight_kg: int
    hair_style: str
    hair_color: str
    outfit_top: str
    outfit_bottom: str
    outfit_shoes: str
    level: int
    xp: int
    xp_to_next_level: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CharacterEnvelope(BaseModel):
    character: CharacterState | None

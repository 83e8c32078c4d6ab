"""Character endpoints - read and save the user's character."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.api.deps import get_current_user_id
from gamelive.core.leveling import xp_to_next_level
from gamelive.db.database import get_db
from gamelive.models.character import Character
from gamelive.schemas.character import CharacterEnvelope, CharacterSave, CharacterState
from gamelive.services.asset_catalog import AssetCatalog, get_asset_catalog
from gamelive.services.character_service import character_service

router = APIRouter()


def character_to_response(character: Character) -> CharacterState:
    """Convert ORM model to response schema with computed fields."""
    state = CharacterState.model_validate(character)
    state.xp_to_next_level = xp_to_next_level(character.level)
    return state


@router.get("", response_model=CharacterEnvelope)
async def get_character(
    owner_id: int = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)
):
    """Get the current user's character, or null before one is created."""
    character = await character_service.get_character(db, owner_id)
    return CharacterEnvelope(
        character=character_to_response(character) if character else None
    )


@router.post("", response_model=CharacterEnvelope)
async def save_character(
    data: CharacterSave,
    owner_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    catalog: AssetCatalog = Depends(get_asset_catalog),
):
    """Create the character or replace its appearance."""
    character = await character_service.save_character(
        db, owner_id, data.model_dump(), catalog
    )
    return CharacterEnvelope(character=character_to_response(character))

"""Character service - validated create-or-update of a user's character."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.db.database import atomic
from gamelive.models.character import Character
from gamelive.repositories.character_repository import CharacterRepository
from gamelive.services.asset_catalog import AssetCatalog
from gamelive.services.validation import validate_character_payload

logger = logging.getLogger(__name__)


class CharacterService:
    @staticmethod
    async def get_character(db: AsyncSession, owner_id: int) -> Character | None:
        return await CharacterRepository(db).get(owner_id)

    @staticmethod
    async def save_character(
        db: AsyncSession, owner_id: int, payload: dict[str, Any], catalog: AssetCatalog
    ) -> Character:
        """Create the owner's character or overwrite its appearance.

        Level and xp are left as they are on update.
        """
        validate_character_payload(payload, catalog)
        async with atomic(db, "save character"):
            character = await CharacterRepository(db).upsert(owner_id, payload)
        logger.info("Character saved", extra={"owner_id": owner_id, "character_id": character.id})
        return character


character_service = CharacterService()

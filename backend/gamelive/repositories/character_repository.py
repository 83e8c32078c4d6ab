"""Owner-scoped data access for the single character of each user."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.db.database import upsert, utcnow
from gamelive.models.character import Character

DESCRIPTIVE_FIELDS = (
    "name",
    "age",
    "height_cm",
    "weight_kg",
    "hair_style",
    "hair_color",
    "outfit_top",
    "outfit_bottom",
    "outfit_shoes",
)


class CharacterRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, owner_id: int) -> Character | None:
        result = await self.session.execute(
            select(Character).where(Character.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, owner_id: int, character_id: int) -> Character | None:
        result = await self.session.execute(
            select(Character)
            .where(Character.id == character_id, Character.user_id == owner_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def upsert(self, owner_id: int, fields: dict[str, Any]) -> Character:
        """Insert the owner's character, or overwrite its descriptive fields."""
        now = utcnow()
        values = {name: fields[name] for name in DESCRIPTIVE_FIELDS}
        values.update(user_id=owner_id, created_at=now, updated_at=now)
        stmt = upsert(
            self.session,
            Character,
            values,
            conflict_on=["user_id"],
            update_fields=[*DESCRIPTIVE_FIELDS, "updated_at"],
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def set_progress(self, character: Character, level: int, xp: int) -> Character:
        character.level = level
        character.xp = xp
        character.updated_at = utcnow()
        await self.session.flush()
        return character

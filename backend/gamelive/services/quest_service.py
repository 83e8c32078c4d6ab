"""Quest service - validated create/update/delete of quests and their steps."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.db.database import atomic, utcnow
from gamelive.exceptions import NotFoundError, ValidationError
from gamelive.models.quest import QUEST_STATUSES, STATUS_ACTIVE, STATUS_DONE, Quest, QuestStep
from gamelive.repositories.character_repository import CharacterRepository
from gamelive.repositories.quest_repository import QuestRepository, build_steps
from gamelive.services.validation import (
    validate_quest_patch,
    validate_quest_payload,
    validate_step_patch,
)

logger = logging.getLogger(__name__)


class QuestService:
    @staticmethod
    async def list_quests(db: AsyncSession, owner_id: int, status: str = STATUS_ACTIVE) -> list[Quest]:
        if status not in QUEST_STATUSES:
            raise ValidationError("Invalid status")
        return await QuestRepository(db).list_by_status(owner_id, status)

    @staticmethod
    async def create_quest(db: AsyncSession, owner_id: int, payload: dict[str, Any]) -> Quest:
        """Create an active quest and its steps in one transaction.

        Step entries without a title are dropped; the rest keep their order
        and get indices 0..n-1.
        """
        fields = validate_quest_payload(payload)
        step_titles = [
            step["title"] for step in payload.get("steps") or [] if step.get("title")
        ]

        async with atomic(db, "create quest"):
            character = await CharacterRepository(db).get(owner_id)
            if character is None:
                raise ValidationError("Create a character before adding quests")
            quest = Quest(
                user_id=owner_id,
                character_id=character.id,
                status=STATUS_ACTIVE,
                steps=build_steps(step_titles),
                **fields,
            )
            await QuestRepository(db).add(quest)

        logger.info(
            "Quest created",
            extra={"owner_id": owner_id, "quest_id": quest.id, "steps": len(step_titles)},
        )
        return quest

    @staticmethod
    async def patch_quest(
        db: AsyncSession, owner_id: int, quest_id: int, changes: dict[str, Any]
    ) -> Quest:
        validate_quest_patch(changes)

        async with atomic(db, "update quest"):
            quest = await QuestRepository(db).get(owner_id, quest_id, for_update=True)
            if quest is None:
                raise NotFoundError("Quest not found")

            now = utcnow()
            new_status = changes.get("status", quest.status)
            if quest.status == STATUS_DONE and new_status != STATUS_DONE:
                raise ValidationError("Completed quests cannot be reopened")
            if quest.status == STATUS_ACTIVE and new_status == STATUS_DONE:
                quest.completed_at = now

            for field, value in changes.items():
                setattr(quest, field, value)
            quest.updated_at = now
            await db.flush()

        return quest

    @staticmethod
    async def delete_quest(db: AsyncSession, owner_id: int, quest_id: int) -> None:
        async with atomic(db, "delete quest"):
            repo = QuestRepository(db)
            quest = await repo.get(owner_id, quest_id)
            if quest is None:
                raise NotFoundError("Quest not found")
            await repo.delete(quest)

    @staticmethod
    async def add_step(db: AsyncSession, owner_id: int, quest_id: int, title: str | None) -> QuestStep:
        """Append a step after the current last one."""
        if not title:
            raise ValidationError("title is required")

        async with atomic(db, "create step"):
            repo = QuestRepository(db)
            quest = await repo.get(owner_id, quest_id)
            if quest is None:
                raise NotFoundError("Quest not found")
            step = QuestStep(
                quest_id=quest.id,
                title=title,
                is_done=False,
                order_index=await repo.next_step_index(quest.id),
            )
            await repo.add_step(step)

        return step

    @staticmethod
    async def patch_step(
        db: AsyncSession, owner_id: int, step_id: int, changes: dict[str, Any]
    ) -> QuestStep:
        validate_step_patch(changes)

        async with atomic(db, "update step"):
            step = await QuestRepository(db).get_step(owner_id, step_id)
            if step is None:
                raise NotFoundError("Step not found")
            for field, value in changes.items():
                setattr(step, field, value)
            await db.flush()

        return step

    @staticmethod
    async def delete_step(db: AsyncSession, owner_id: int, step_id: int) -> None:
        async with atomic(db, "delete step"):
            repo = QuestRepository(db)
            step = await repo.get_step(owner_id, step_id)
            if step is None:
                raise NotFoundError("Step not found")
            await repo.delete_step(step)


quest_service = QuestService()

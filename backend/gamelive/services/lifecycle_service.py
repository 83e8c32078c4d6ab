"""Quest lifecycle - completing a quest, awarding xp and spawning repeats.

Completion is a single transaction:

1. lock the quest row (``SELECT ... FOR UPDATE``), scoped to the owner
2. refuse quests that are already done
3. flip the status with a compare-and-swap on ``status = 'active'``
4. lock the owning character row
5. apply the leveling calculator with the quest's xp reward
6. for repeating quests, insert the successor with a fresh copy of the steps

The compare-and-swap in step 3 keeps two concurrent completions from both
succeeding on backends without row locks (SQLite). A failure at any point
rolls the whole unit back, so a quest is never seen done without its xp.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.core.leveling import advance
from gamelive.core.recurrence import next_due_at
from gamelive.db.database import atomic, utcnow
from gamelive.exceptions import NotFoundError, ValidationError
from gamelive.models.character import Character
from gamelive.models.quest import STATUS_ACTIVE, STATUS_DONE, Quest
from gamelive.repositories.character_repository import CharacterRepository
from gamelive.repositories.quest_repository import QuestRepository, build_steps

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    quest: Quest
    character: Character
    next_quest: Quest | None = None


class QuestLifecycleService:
    @staticmethod
    async def complete_quest(db: AsyncSession, owner_id: int, quest_id: int) -> CompletionResult:
        quests = QuestRepository(db)
        characters = CharacterRepository(db)

        async with atomic(db, "complete quest"):
            quest = await quests.get(owner_id, quest_id, for_update=True)
            if quest is None:
                raise NotFoundError("Quest not found")
            if quest.status == STATUS_DONE:
                raise ValidationError("Quest already completed")

            now = utcnow()
            if not await quests.mark_done(owner_id, quest.id, now):
                # Another transaction completed it between our read and write
                raise ValidationError("Quest already completed")
            quest.status = STATUS_DONE
            quest.completed_at = now
            quest.updated_at = now

            character = await characters.get_for_update(owner_id, quest.character_id)
            if character is None:
                raise ValidationError("Character not found for quest")

            old_level = character.level
            level, xp = advance(character.level, character.xp, quest.xp_reward)
            await characters.set_progress(character, level, xp)

            next_quest = None
            if quest.is_recurring:
                next_quest = await QuestLifecycleService._spawn_successor(quests, quest)

        logger.info(
            "Quest completed",
            extra={
                "owner_id": owner_id,
                "quest_id": quest.id,
                "xp_reward": quest.xp_reward,
                "level_before": old_level,
                "level_after": character.level,
                "next_quest_id": next_quest.id if next_quest else None,
            },
        )
        return CompletionResult(quest=quest, character=character, next_quest=next_quest)

    @staticmethod
    async def _spawn_successor(quests: QuestRepository, quest: Quest) -> Quest:
        """Clone a repeating quest as active, due one period later, steps unchecked."""
        original_steps = await quests.list_steps(quest.id)
        successor = Quest(
            user_id=quest.user_id,
            character_id=quest.character_id,
            title=quest.title,
            description=quest.description,
            xp_reward=quest.xp_reward,
            status=STATUS_ACTIVE,
            due_at=next_due_at(quest.due_at, quest.repeat_type),
            repeat_type=quest.repeat_type,
            repeat_interval=quest.repeat_interval,
            steps=build_steps(step.title for step in original_steps),
        )
        return await quests.add(successor)


quest_lifecycle = QuestLifecycleService()

"""Owner-scoped data access for quests and quest steps.

Every query filters on ``user_id`` (steps through their parent quest), so a
row owned by someone else behaves exactly like a missing row.
"""

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.models.quest import STATUS_ACTIVE, STATUS_DONE, Quest, QuestStep


class QuestRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_status(self, owner_id: int, status: str) -> list[Quest]:
        """Quests with their ordered steps, newest first."""
        stmt = (
            select(Quest)
            .where(Quest.user_id == owner_id, Quest.status == status)
            .order_by(Quest.created_at.desc(), Quest.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, owner_id: int, quest_id: int, *, for_update: bool = False) -> Quest | None:
        stmt = select(Quest).where(Quest.id == quest_id, Quest.user_id == owner_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, quest: Quest) -> Quest:
        self.session.add(quest)
        await self.session.flush()
        return quest

    async def delete(self, quest: Quest) -> None:
        await self.session.delete(quest)
        await self.session.flush()

    async def mark_done(self, owner_id: int, quest_id: int, now: datetime) -> bool:
        """Flip an active quest to done. False if it was no longer active."""
        result = await self.session.execute(
            update(Quest)
            .where(
                Quest.id == quest_id,
                Quest.user_id == owner_id,
                Quest.status == STATUS_ACTIVE,
            )
            .values(status=STATUS_DONE, completed_at=now, updated_at=now)
        )
        return result.rowcount == 1

    # --- steps ---

    async def list_steps(self, quest_id: int) -> list[QuestStep]:
        result = await self.session.execute(
            select(QuestStep)
            .where(QuestStep.quest_id == quest_id)
            .order_by(QuestStep.order_index)
        )
        return list(result.scalars().all())

    async def next_step_index(self, quest_id: int) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.max(QuestStep.order_index), -1) + 1).where(
                QuestStep.quest_id == quest_id
            )
        )
        return result.scalar_one()

    async def get_step(self, owner_id: int, step_id: int) -> QuestStep | None:
        stmt = (
            select(QuestStep)
            .join(Quest, Quest.id == QuestStep.quest_id)
            .where(QuestStep.id == step_id, Quest.user_id == owner_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_step(self, step: QuestStep) -> QuestStep:
        self.session.add(step)
        await self.session.flush()
        return step

    async def delete_step(self, step: QuestStep) -> None:
        await self.session.delete(step)
        await self.session.flush()


def build_steps(titles: Iterable[str]) -> list[QuestStep]:
    """Fresh, unchecked steps with dense zero-based indices."""
    return [
        QuestStep(title=title, is_done=False, order_index=index)
        for index, title in enumerate(titles)
    ]

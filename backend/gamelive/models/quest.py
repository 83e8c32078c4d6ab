"""Quest models - trackable tasks and their ordered checklist steps."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamelive.db.database import Base, utcnow

STATUS_ACTIVE = "active"
STATUS_DONE = "done"
QUEST_STATUSES = (STATUS_ACTIVE, STATUS_DONE)

REPEAT_NONE = "none"
REPEAT_TYPES = (REPEAT_NONE, "daily", "weekly", "monthly")

DEFAULT_XP_REWARD = 10


class Quest(Base):
    __tablename__ = "quests"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    character_id: Mapped[int] = mapped_column(ForeignKey("characters.id", ondelete="CASCADE"))

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    xp_reward: Mapped[int] = mapped_column(Integer, default=DEFAULT_XP_REWARD)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_ACTIVE)

    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    repeat_type: Mapped[str] = mapped_column(String(20), default=REPEAT_NONE)
    repeat_interval: Mapped[int] = mapped_column(Integer, default=1)  # stored, not consulted yet

    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    steps: Mapped[list["QuestStep"]] = relationship(
        back_populates="quest",
        order_by="QuestStep.order_index",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_recurring(self) -> bool:
        return bool(self.repeat_type) and self.repeat_type != REPEAT_NONE


class QuestStep(Base):
    __tablename__ = "quest_steps"
    __table_args__ = (UniqueConstraint("quest_id", "order_index", name="uq_quest_steps_order"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    quest_id: Mapped[int] = mapped_column(ForeignKey("quests.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200))
    is_done: Mapped[bool] = mapped_column(Boolean, default=False)
    order_index: Mapped[int] = mapped_column(Integer)

    quest: Mapped[Quest] = relationship(back_populates="steps")

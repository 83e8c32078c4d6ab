"""Character model - the single role-play character a user owns."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gamelive.db.database import Base, utcnow

STARTING_LEVEL = 1


class Character(Base):
    __tablename__ = "characters"
    __table_args__ = (
        CheckConstraint("level >= 1", name="ck_characters_level"),
        CheckConstraint("xp >= 0", name="ck_characters_xp"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )

    # Descriptive fields, edited through the character save call
    name: Mapped[str] = mapped_column(String(100))
    age: Mapped[int] = mapped_column(Integer)
    height_cm: Mapped[int] = mapped_column(Integer)
    weight_kg: Mapped[int] = mapped_column(Integer)
    hair_style: Mapped[str] = mapped_column(String(100))
    hair_color: Mapped[str] = mapped_column(String(100))
    outfit_top: Mapped[str] = mapped_column(String(100))
    outfit_bottom: Mapped[str] = mapped_column(String(100))
    outfit_shoes: Mapped[str] = mapped_column(String(100))

    # Progression, only touched by quest completion
    level: Mapped[int] = mapped_column(Integer, default=STARTING_LEVEL)
    xp: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

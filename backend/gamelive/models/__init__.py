"""Database models package."""

from gamelive.models.user import User
from gamelive.models.character import Character
from gamelive.models.quest import Quest, QuestStep

__all__ = ["User", "Character", "Quest", "QuestStep"]

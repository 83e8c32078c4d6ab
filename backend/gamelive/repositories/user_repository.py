"""User rows, keyed by the external Telegram id."""

from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.db.database import upsert, utcnow
from gamelive.models.user import User


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_on_login(
        self, telegram_id: int, username: str | None, first_name: str | None
    ) -> User:
        """Create the user on first login, refresh profile fields afterwards."""
        now = utcnow()
        stmt = upsert(
            self.session,
            User,
            {
                "telegram_id": telegram_id,
                "username": username,
                "first_name": first_name,
                "created_at": now,
                "updated_at": now,
            },
            conflict_on=["telegram_id"],
            update_fields=["username", "first_name", "updated_at"],
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

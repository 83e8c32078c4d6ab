"""Async SQLAlchemy engine, session factory and transaction helpers."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from gamelive.config import settings
from gamelive.exceptions import ServerError

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields one session per request."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def atomic(session: AsyncSession, action: str) -> AsyncGenerator[AsyncSession, None]:
    """Run a block as one unit of work.

    Commits when the block finishes, rolls back on any exception. Storage
    errors are re-raised as ServerError("Failed to <action>") with the
    driver message in ``details``; domain errors propagate unchanged.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Transaction rolled back", extra={"action": action, "error": str(exc)})
        raise ServerError(f"Failed to {action}", details=str(exc)) from exc
    except Exception:
        await session.rollback()
        raise


def upsert(
    session: AsyncSession,
    model: type[Base],
    values: dict[str, Any],
    conflict_on: list[str],
    update_fields: list[str],
):
    """Build an INSERT ... ON CONFLICT DO UPDATE ... RETURNING for ``model``.

    PostgreSQL and SQLite both support the statement; pick the dialect the
    session is bound to.
    """
    dialect = session.bind.dialect.name
    insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=conflict_on,
        set_={field: stmt.excluded[field] for field in update_fields},
    )
    return stmt.returning(model).execution_options(populate_existing=True)

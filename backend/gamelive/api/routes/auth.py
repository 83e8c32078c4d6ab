"""Auth endpoints - Telegram login and development login."""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from gamelive.api.deps import SESSION_COOKIE
from gamelive.config import settings
from gamelive.db.database import atomic, get_db
from gamelive.exceptions import NotFoundError, UnauthenticatedError, ValidationError
from gamelive.models.user import User
from gamelive.repositories.user_repository import UserRepository
from gamelive.schemas.auth import DevLogin, LoginResponse, TelegramLogin, UserState
from gamelive.services.auth_service import issue_session_token, parse_init_user, verify_init_data

logger = logging.getLogger(__name__)

router = APIRouter()

DEV_TELEGRAM_ID = 999000111
DEV_USERNAME = "dev_user"
DEV_FIRST_NAME = "Dev"


async def _login(
    db: AsyncSession,
    response: Response,
    telegram_id: int,
    username: str | None,
    first_name: str | None,
) -> User:
    """Upsert the user and attach a fresh session cookie."""
    async with atomic(db, "save user"):
        user = await UserRepository(db).upsert_on_login(telegram_id, username, first_name)
    response.set_cookie(
        SESSION_COOKIE,
        issue_session_token(user.id),
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
    )
    logger.info("User logged in", extra={"user_id": user.id, "telegram_id": telegram_id})
    return user


@router.post("/telegram", response_model=LoginResponse)
async def telegram_login(data: TelegramLogin, response: Response, db: AsyncSession = Depends(get_db)):
    """Log in with the initData string the Telegram Mini App was launched with."""
    init_data = data.init_data
    if not init_data:
        raise ValidationError("initData is required", code="bad_request")

    if settings.DEV_AUTH and init_data == "dev":
        user = await _login(db, response, DEV_TELEGRAM_ID, DEV_USERNAME, DEV_FIRST_NAME)
        return LoginResponse(user=UserState.model_validate(user), dev=True)

    if not verify_init_data(init_data):
        raise UnauthenticatedError("Invalid Telegram initData", code="invalid_init_data")

    user_data = parse_init_user(init_data)
    if not user_data or not user_data.get("id"):
        raise ValidationError("Missing user data in initData", code="bad_request")

    user = await _login(
        db,
        response,
        int(user_data["id"]),
        user_data.get("username"),
        user_data.get("first_name"),
    )
    return LoginResponse(user=UserState.model_validate(user))


@router.post("/dev", response_model=LoginResponse)
async def dev_login(data: DevLogin, response: Response, db: AsyncSession = Depends(get_db)):
    """Log in without Telegram; only available when DEV_AUTH is enabled."""
    if not settings.DEV_AUTH:
        raise NotFoundError("DEV_AUTH is disabled")
    user = await _login(
        db,
        response,
        data.telegram_id or DEV_TELEGRAM_ID,
        data.username or DEV_USERNAME,
        data.first_name or DEV_FIRST_NAME,
    )
    return LoginResponse(user=UserState.model_validate(user), dev=True)

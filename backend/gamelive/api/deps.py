"""Shared FastAPI dependencies."""

from fastapi import Request

from gamelive.services.auth_service import resolve_session

SESSION_COOKIE = "session"


async def get_current_user_id(request: Request) -> int:
    """Owner id from the session cookie; raises Unauthenticated otherwise."""
    return resolve_session(request.cookies.get(SESSION_COOKIE))

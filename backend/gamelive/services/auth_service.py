"""Auth service - Telegram initData verification and session tokens.

Telegram signs the Mini App launch payload with a key derived from the bot
token; see https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app
"""

import hashlib
import hmac
import json
import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qsl

from jose import JWTError, jwt

from gamelive.config import settings
from gamelive.exceptions import ConfigError, UnauthenticatedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
WEBAPP_KEY = b"WebAppData"


def _data_check_string(pairs: list[tuple[str, str]]) -> str:
    return "\n".join(sorted(f"{key}={value}" for key, value in pairs))


def sign_init_data(pairs: list[tuple[str, str]], bot_token: str) -> str:
    """Hex HMAC of the sorted ``key=value`` lines, as Telegram computes it."""
    secret_key = hmac.new(WEBAPP_KEY, bot_token.encode(), hashlib.sha256).digest()
    return hmac.new(secret_key, _data_check_string(pairs).encode(), hashlib.sha256).hexdigest()


def verify_init_data(init_data: str, bot_token: str | None = None) -> bool:
    """True when ``init_data`` carries a valid ``hash`` for the bot token."""
    bot_token = bot_token if bot_token is not None else settings.TELEGRAM_BOT_TOKEN
    if not bot_token:
        raise ConfigError("TELEGRAM_BOT_TOKEN is required")

    pairs = parse_qsl(init_data, keep_blank_values=True)
    received = [value for key, value in pairs if key == "hash"]
    if not received:
        return False
    fields = [(key, value) for key, value in pairs if key != "hash"]
    return hmac.compare_digest(received[0].lower(), sign_init_data(fields, bot_token))


def parse_init_user(init_data: str) -> dict | None:
    """The ``user`` JSON object embedded in initData, if any."""
    raw = dict(parse_qsl(init_data, keep_blank_values=True)).get("user")
    if not raw:
        return None
    try:
        user = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return user if isinstance(user, dict) else None


def _secret() -> str:
    if not settings.JWT_SECRET:
        raise ConfigError("JWT_SECRET is required")
    return settings.JWT_SECRET


def issue_session_token(user_id: int) -> str:
    expires = datetime.now(timezone.utc) + timedelta(seconds=settings.SESSION_TTL_SECONDS)
    return jwt.encode({"user_id": user_id, "exp": expires}, _secret(), algorithm=JWT_ALGORITHM)


def resolve_session(token: str | None) -> int:
    """Owner id carried by a session token."""
    if not token:
        raise UnauthenticatedError("Not authenticated")
    try:
        payload = jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        raise UnauthenticatedError("Invalid session") from exc
    user_id = payload.get("user_id")
    if not isinstance(user_id, int):
        raise UnauthenticatedError("Invalid session")
    return user_id

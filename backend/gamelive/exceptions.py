"""Error taxonomy shared by services and the HTTP layer.

Every error carries a machine-readable ``code``, the HTTP status it maps to,
a human-readable ``message`` and optional ``details``. The API renders them as
``{"code": ..., "message": ..., "details": ...}``.
"""

from typing import Any


class GameliveError(Exception):
    """Base exception for the gamelive service."""

    code = "server_error"
    status_code = 500

    def __init__(self, message: str, details: Any = None, code: str | None = None) -> None:
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(GameliveError):
    """Bad input shape or range; message names the violated rule."""

    code = "validation_error"
    status_code = 400


class NotFoundError(GameliveError):
    """No row matches the owner and id."""

    code = "not_found"
    status_code = 404


class UnauthenticatedError(GameliveError):
    """Missing or invalid session, or a rejected login assertion."""

    code = "unauthorized"
    status_code = 401


class ConfigError(GameliveError):
    """Required server configuration is missing."""

    code = "config_error"
    status_code = 500


class ServerError(GameliveError):
    """Storage failure or unexpected exception."""

    code = "server_error"
    status_code = 500

"""Auth-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class TelegramLogin(BaseModel):
    init_data: str | None = Field(default=None, alias="initData")


class DevLogin(BaseModel):
    telegram_id: int | None = None
    username: str | None = None
    first_name: str | None = None


class UserState(BaseModel):
    id: int
    telegram_id: int
    username: str | None
    first_name: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    ok: bool = True
    user: UserState
    dev: bool = False

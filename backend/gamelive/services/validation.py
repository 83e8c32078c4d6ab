"""Field-level business rules for characters and quests.

Each check raises ValidationError with a message naming the violated rule.
Checks run before any row is touched.
"""

from typing import Any

from gamelive.exceptions import ValidationError
from gamelive.models.quest import DEFAULT_XP_REWARD, QUEST_STATUSES, REPEAT_NONE, REPEAT_TYPES
from gamelive.services.asset_catalog import AssetCatalog

CHARACTER_REQUIRED_FIELDS = (
    "name",
    "age",
    "height_cm",
    "weight_kg",
    "hair_style",
    "hair_color",
    "outfit_top",
    "outfit_bottom",
    "outfit_shoes",
)

# (field, low, high, message)
CHARACTER_RANGES = (
    ("age", 1, 120, "Invalid age"),
    ("height_cm", 50, 250, "Invalid height"),
    ("weight_kg", 20, 300, "Invalid weight"),
)

MIN_XP_REWARD = 1
MAX_XP_REWARD = 1000


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate_character_payload(payload: dict[str, Any], catalog: AssetCatalog) -> None:
    for field in CHARACTER_REQUIRED_FIELDS:
        if _is_blank(payload.get(field)):
            raise ValidationError(f"Field {field} is required")

    for field, low, high, message in CHARACTER_RANGES:
        if not low <= payload[field] <= high:
            raise ValidationError(message)

    # hair_color is checked against the hair ids as well; the catalog has no
    # colour category.
    asset_checks = (
        ("hair_style", catalog.hair),
        ("hair_color", catalog.hair),
        ("outfit_top", catalog.top),
        ("outfit_bottom", catalog.bottom),
        ("outfit_shoes", catalog.shoes),
    )
    for field, allowed in asset_checks:
        if payload[field] not in allowed:
            raise ValidationError(f"Invalid {field} asset")


def _check_title(title: Any) -> None:
    if _is_blank(title):
        raise ValidationError("title is required")


def _check_xp_reward(xp_reward: Any) -> None:
    if xp_reward is None or not MIN_XP_REWARD <= xp_reward <= MAX_XP_REWARD:
        raise ValidationError(f"xp_reward must be between {MIN_XP_REWARD} and {MAX_XP_REWARD}")


def _check_repeat_type(repeat_type: Any) -> None:
    if repeat_type not in REPEAT_TYPES:
        raise ValidationError("Invalid repeat_type")


def _check_repeat_interval(repeat_interval: Any) -> None:
    if repeat_interval is None or repeat_interval < 1:
        raise ValidationError("repeat_interval must be a positive integer")


def validate_quest_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Validate a new quest and return its fields with defaults applied."""
    _check_title(payload.get("title"))

    xp_reward = payload.get("xp_reward")
    if xp_reward is None:
        xp_reward = DEFAULT_XP_REWARD
    _check_xp_reward(xp_reward)

    repeat_type = payload.get("repeat_type") or REPEAT_NONE
    _check_repeat_type(repeat_type)

    repeat_interval = payload.get("repeat_interval")
    if repeat_interval is None:
        repeat_interval = 1
    _check_repeat_interval(repeat_interval)

    return {
        "title": payload["title"],
        "description": payload.get("description") or None,
        "xp_reward": xp_reward,
        "due_at": payload.get("due_at"),
        "repeat_type": repeat_type,
        "repeat_interval": repeat_interval,
    }


def validate_quest_patch(changes: dict[str, Any]) -> None:
    """Validate the supplied subset of quest fields."""
    if not changes:
        raise ValidationError("No fields to update")
    if "title" in changes:
        _check_title(changes["title"])
    if "xp_reward" in changes:
        _check_xp_reward(changes["xp_reward"])
    if "repeat_type" in changes:
        _check_repeat_type(changes["repeat_type"])
    if "repeat_interval" in changes:
        _check_repeat_interval(changes["repeat_interval"])
    if "status" in changes and changes["status"] not in QUEST_STATUSES:
        raise ValidationError("Invalid status")


def validate_step_patch(changes: dict[str, Any]) -> None:
    if not changes:
        raise ValidationError("No fields to update")
    if "title" in changes:
        _check_title(changes["title"])
    if "is_done" in changes and changes["is_done"] is None:
        raise ValidationError("is_done must be true or false")

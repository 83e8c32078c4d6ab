"""Recurrence planner - due date of the quest spawned by a repeating quest."""

from datetime import datetime, timedelta, timezone

from gamelive.models.quest import REPEAT_NONE


def _add_month(base: datetime) -> datetime:
    # Days past the end of the target month overflow into the following one,
    # e.g. Jan 31 -> Mar 3 (Mar 2 in leap years), rather than clamping to Feb 28.
    year, month = divmod(base.month, 12)
    first_of_next = base.replace(year=base.year + year, month=month + 1, day=1)
    return first_of_next + timedelta(days=base.day - 1)


def next_due_at(
    previous_due_at: datetime | None, repeat_type: str, now: datetime | None = None
) -> datetime:
    """Return the next due timestamp for ``repeat_type``.

    Steps from ``previous_due_at`` when the quest had one, otherwise from the
    current UTC time. Always advances by exactly one unit; ``repeat_interval``
    is not taken into account.
    """
    if previous_due_at is not None:
        base = previous_due_at
    else:
        base = now or datetime.now(timezone.utc)

    if repeat_type == "daily":
        return base + timedelta(days=1)
    if repeat_type == "weekly":
        return base + timedelta(days=7)
    if repeat_type == "monthly":
        return _add_month(base)
    if repeat_type == REPEAT_NONE:
        raise ValueError("Quests that do not repeat have no next due date")
    raise ValueError(f"Unknown repeat_type: {repeat_type!r}")

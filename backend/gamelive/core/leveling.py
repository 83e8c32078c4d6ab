"""Leveling calculator - converts earned experience into levels.

Advancing from level L to L+1 costs ``100 + (L - 1) * 50`` xp, so every level
is 50 xp more expensive than the previous one. Leftover xp carries over.
"""

BASE_XP_TO_NEXT = 100
XP_STEP_PER_LEVEL = 50


def xp_to_next_level(level: int) -> int:
    """XP required to go from ``level`` to ``level + 1``."""
    return BASE_XP_TO_NEXT + (level - 1) * XP_STEP_PER_LEVEL


def advance(level: int, xp: int, earned_xp: int) -> tuple[int, int]:
    """Apply ``earned_xp`` and return the resulting ``(level, xp)``.

    Cascades through as many level-ups as the total covers, e.g.
    ``advance(1, 0, 300)`` spends 100 then 150 and returns ``(3, 50)``.
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    if xp < 0 or earned_xp < 0:
        raise ValueError("xp values must be non-negative")

    current_level = level
    current_xp = xp + earned_xp
    while current_xp >= xp_to_next_level(current_level):
        current_xp -= xp_to_next_level(current_level)
        current_level += 1
    return current_level, current_xp

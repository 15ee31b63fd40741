"""RFC 5424 log levels.

Level names map to numeric priorities; a handler accepts a record when the
record's priority is greater than or equal to the handler's own level.

Example:
    >>> get_level_priority("warning")
    300
    >>> get_level_name(550)
    'ALERT'
"""

from __future__ import annotations

from typing import Final

DEBUG: Final[int] = 100
INFO: Final[int] = 200
NOTICE: Final[int] = 250
WARNING: Final[int] = 300
ERROR: Final[int] = 400
CRITICAL: Final[int] = 500
ALERT: Final[int] = 550
EMERGENCY: Final[int] = 600

_DEFAULT_LEVELS: Final[dict[str, int]] = {
    "DEBUG": DEBUG,
    "INFO": INFO,
    "NOTICE": NOTICE,
    "WARNING": WARNING,
    "WARN": WARNING,  # alias
    "ERROR": ERROR,
    "CRITICAL": CRITICAL,
    "ALERT": ALERT,
    "EMERGENCY": EMERGENCY,
}

_ALIASES: Final[frozenset[str]] = frozenset({"WARN"})

_NAMES_BY_PRIORITY: Final[dict[int, str]] = {
    priority: name
    for name, priority in _DEFAULT_LEVELS.items()
    if name not in _ALIASES
}


def is_known_level(level: str | int) -> bool:
    """Return True when `level` is a known level name or priority."""
    if isinstance(level, bool):
        return False
    if isinstance(level, int):
        return level in _NAMES_BY_PRIORITY
    return level.strip().upper() in _DEFAULT_LEVELS


def get_level_priority(level: str | int) -> int:
    """Get priority for a level name or priority.

    Args:
        level: Level name (case-insensitive) or numeric priority

    Returns:
        Priority value.

    Raises:
        ValueError: If the level is unknown
    """
    if isinstance(level, int) and not isinstance(level, bool):
        if level in _NAMES_BY_PRIORITY:
            return level
        raise ValueError(f"Unknown level priority {level}")
    try:
        return _DEFAULT_LEVELS[str(level).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown level '{level}'") from None


def get_level_name(priority: int) -> str:
    """Return the canonical upper-case name for a priority."""
    try:
        return _NAMES_BY_PRIORITY[priority]
    except KeyError:
        raise ValueError(f"Unknown level priority {priority}") from None


def get_all_levels() -> dict[str, int]:
    """Get all level names (aliases included) and their priorities."""
    return dict(_DEFAULT_LEVELS)

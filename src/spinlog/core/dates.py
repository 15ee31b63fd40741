"""
PHP-style date patterns.

Log file names and line timestamps are configured with PHP `date()` tokens
(``Y-m-d``, ``Y-m-d H:i:s``). A backslash escapes the next character; any
character that is not a token is copied through.
"""

from __future__ import annotations

import calendar
from datetime import datetime
from typing import Callable

_DAY_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def _ordinal_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return _DAY_SUFFIXES.get(day % 10, "th")


def _utc_offset(when: datetime, *, colon: bool) -> str:
    offset = when.utcoffset()
    if offset is None:
        return "+00:00" if colon else "+0000"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


_TOKENS: dict[str, Callable[[datetime], str]] = {
    # Day
    "d": lambda w: f"{w.day:02d}",
    "D": lambda w: w.strftime("%a"),
    "j": lambda w: str(w.day),
    "l": lambda w: w.strftime("%A"),
    "N": lambda w: str(w.isoweekday()),
    "S": lambda w: _ordinal_suffix(w.day),
    "w": lambda w: str(w.isoweekday() % 7),
    "z": lambda w: str(w.timetuple().tm_yday - 1),
    # Week
    "W": lambda w: f"{w.isocalendar()[1]:02d}",
    # Month
    "F": lambda w: w.strftime("%B"),
    "m": lambda w: f"{w.month:02d}",
    "M": lambda w: w.strftime("%b"),
    "n": lambda w: str(w.month),
    "t": lambda w: str(calendar.monthrange(w.year, w.month)[1]),
    # Year
    "L": lambda w: "1" if calendar.isleap(w.year) else "0",
    "o": lambda w: str(w.isocalendar()[0]),
    "Y": lambda w: f"{w.year:04d}",
    "y": lambda w: f"{w.year % 100:02d}",
    # Time
    "a": lambda w: "am" if w.hour < 12 else "pm",
    "A": lambda w: "AM" if w.hour < 12 else "PM",
    "g": lambda w: str(w.hour % 12 or 12),
    "G": lambda w: str(w.hour),
    "h": lambda w: f"{w.hour % 12 or 12:02d}",
    "H": lambda w: f"{w.hour:02d}",
    "i": lambda w: f"{w.minute:02d}",
    "s": lambda w: f"{w.second:02d}",
    "u": lambda w: f"{w.microsecond:06d}",
    "v": lambda w: f"{w.microsecond // 1000:03d}",
    # Timezone
    "e": lambda w: str(w.tzinfo) if w.tzinfo is not None else "UTC",
    "T": lambda w: w.tzname() or "UTC",
    "P": lambda w: _utc_offset(w, colon=True),
    "O": lambda w: _utc_offset(w, colon=False),
    # Full date/time
    "U": lambda w: str(int(w.timestamp())),
}


def format_date(pattern: str, when: datetime) -> str:
    """Render `when` using a PHP `date()` pattern.

    >>> format_date("Y-m-d", datetime(2024, 3, 7))
    '2024-03-07'
    """
    out: list[str] = []
    escaped = False
    for ch in pattern:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            render = _TOKENS.get(ch)
            out.append(render(when) if render is not None else ch)
    return "".join(out)


__all__ = ["format_date"]

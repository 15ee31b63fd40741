"""Template-based single-line formatter.

Placeholders are ``%name%`` tokens. Supported names are ``datetime``,
``channel``, ``level_name``, ``level``, ``message``, ``context`` and
``extra``, plus ``%context.<key>%`` / ``%extra.<key>%`` which render one value
and remove it from the ``%context%`` / ``%extra%`` dump. Unknown tokens are
left as they are; dotted tokens whose key is absent render as nothing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ...core.dates import format_date
from ...core.events import LogRecord
from ...core.serialization import serialize_value
from ...core.settings import DEFAULT_LINE_DATETIME, DEFAULT_LINE_FORMAT

_TOKEN_RE = re.compile(r"%(?:(context|extra)\.([^%\s]+)|([A-Za-z_]+))%")
_LINE_BREAKS_RE = re.compile(r"\r\n|\r|\n")


class LineFormatter:
    name = "line"

    def __init__(
        self,
        line_format: str = DEFAULT_LINE_FORMAT,
        date_format: str = DEFAULT_LINE_DATETIME,
        *,
        allow_inline_line_breaks: bool = False,
    ) -> None:
        self.line_format = line_format
        self.date_format = date_format
        self.allow_inline_line_breaks = allow_inline_line_breaks

    def format(self, record: LogRecord) -> str:
        sections: dict[str, dict[str, Any]] = {
            "context": dict(record.context),
            "extra": dict(record.extra),
        }
        # Dotted tokens consume their keys before the full dumps are rendered
        picked: dict[tuple[str, str], Any] = {}
        for match in _TOKEN_RE.finditer(self.line_format):
            section, key = match.group(1), match.group(2)
            if section and key in sections[section]:
                picked[(section, key)] = sections[section].pop(key)

        simple: dict[str, str] = {
            "datetime": format_date(self.date_format, record.datetime.astimezone()),
            "channel": record.channel,
            "level_name": record.level_name,
            "level": str(record.level),
            "message": self._clean(record.message),
            "context": self._stringify(sections["context"]),
            "extra": self._stringify(sections["extra"]),
        }

        def _substitute(match: re.Match[str]) -> str:
            section, key, name = match.groups()
            if section:
                if (section, key) in picked:
                    return self._stringify(picked[(section, key)])
                return ""
            return simple.get(name, match.group(0))

        return _TOKEN_RE.sub(_substitute, self.line_format)

    def _stringify(self, value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return self._clean(str(value))
        if isinstance(value, BaseException):
            return self._clean(f"[object] ({type(value).__name__}: {value})")
        if isinstance(value, (Mapping, list, tuple, set, frozenset)) and not value:
            return "[]"
        return self._clean(serialize_value(value))

    def _clean(self, text: str) -> str:
        if self.allow_inline_line_breaks:
            return text
        return _LINE_BREAKS_RE.sub(" ", text)


__all__ = ["LineFormatter"]

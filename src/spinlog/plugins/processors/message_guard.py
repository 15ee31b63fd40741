from __future__ import annotations

from ...core.events import LogRecord

RESERVED_KEY = "message"
RENAMED_KEY = "custom_message"


class MessageCollisionGuard:
    """Move a context ``message`` to ``custom_message``.

    The structured formatter writes the record's own message under
    ``message``; a caller-supplied context value with that name would
    otherwise collide with it. An existing ``custom_message`` is overwritten.
    """

    name = "message_collision_guard"

    def __call__(self, record: LogRecord) -> LogRecord:
        if RESERVED_KEY not in record.context:
            return record
        context = dict(record.context)
        context[RENAMED_KEY] = context.pop(RESERVED_KEY)
        return record.with_(context=context)


__all__ = ["MessageCollisionGuard", "RENAMED_KEY", "RESERVED_KEY"]

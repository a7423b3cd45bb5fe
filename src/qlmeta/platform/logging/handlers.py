"""Rich console handler that highlights metadata store context.

Where: platform/logging/handlers.py
What: Render attribute kind and object id extras alongside the log message.
Why: Keep store log lines scannable when many objects are touched in a run.
"""

from __future__ import annotations

import logging
from typing import Final

from rich.logging import RichHandler
from rich.text import Text

_MAX_ID_LENGTH: Final[int] = 48


def _shorten(value: str, limit: int = _MAX_ID_LENGTH) -> str:
    if len(value) <= limit:
        return value
    return "…" + value[-(limit - 1) :]


class MetadataRichHandler(RichHandler):
    """RichHandler that prefixes messages with ``attribute`` and ``object_id`` extras."""

    def __init__(self, *args: object, **kwargs: object) -> None:
        _ = kwargs.setdefault("show_path", False)
        _ = kwargs.setdefault("markup", False)
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]

    def render_message(self, record: logging.LogRecord, message: str) -> Text:  # type: ignore[override]
        attribute = getattr(record, "attribute", None)
        object_id = getattr(record, "object_id", None)

        text = Text()
        if isinstance(attribute, str) and attribute:
            _ = text.append(f"[{attribute}] ", style="bold cyan")
        if isinstance(object_id, str) and object_id:
            _ = text.append(_shorten(object_id), style="white")
            _ = text.append(" ")
        _ = text.append(message)
        return text


__all__ = ["MetadataRichHandler"]

"""
Logging setup and the in-app log overlay.

Every module logs through the standard ``logging`` package. ``LogBuffer``
keeps the most recent records in memory so the overlay (F12) can page
through them; a file sink is added when file logging is requested.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime
from pathlib import Path

from rich.console import Group, RenderableType
from rich.style import Style
from rich.text import Text
from textual.geometry import Region

from dbmanager import strings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"
MAX_RECORDS = 1000
SEPARATOR = "|"

LEVEL_STYLES: dict[int, Style] = {
    logging.CRITICAL: Style(color="red", bold=True),
    logging.ERROR: Style(color="red"),
    logging.WARNING: Style(color="yellow"),
    logging.INFO: Style(color="cyan"),
    logging.DEBUG: Style(color="green"),
}
TRACE_STYLE = Style(color="magenta")


class LogBuffer(logging.Handler):
    """Handler keeping the last ``capacity`` records in memory."""

    def __init__(self, capacity: int = MAX_RECORDS, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.records: deque[logging.LogRecord] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def clear(self) -> None:
        self.records.clear()


def format_record(record: logging.LogRecord) -> Text:
    """One overlay line: timestamp | LEVEL | file:line | message."""
    stamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    style = LEVEL_STYLES.get(record.levelno, TRACE_STYLE)
    line = Text(no_wrap=True, overflow="ellipsis")
    line.append(stamp)
    line.append(SEPARATOR)
    line.append(f"{record.levelname:<8}", style=style)
    line.append(SEPARATOR)
    line.append(f"{record.filename}:{record.lineno}")
    line.append(SEPARATOR)
    line.append(record.getMessage(), style=style)
    return line


class LogView:
    """Paging state for the log overlay.

    Page 0 shows the newest records; each previous page goes further back.
    """

    def __init__(self, buffer: LogBuffer) -> None:
        self.buffer = buffer
        self.page = 0
        self.page_size = 1

    def _last_page(self) -> int:
        return max(0, (len(self.buffer) - 1) // self.page_size)

    def next_page(self) -> None:
        """Move toward newer records."""
        self.page = max(0, self.page - 1)

    def prev_page(self) -> None:
        """Move toward older records."""
        self.page = min(self._last_page(), self.page + 1)

    def visible_records(self) -> list[logging.LogRecord]:
        records = list(self.buffer.records)
        self.page = min(self.page, self._last_page())
        end = len(records) - self.page * self.page_size
        start = max(0, end - self.page_size)
        return records[start:end]

    def render(self, region: Region) -> RenderableType:
        if region.width <= 0 or region.height <= 0:
            return Text()
        # First row holds the title.
        self.page_size = max(1, region.height - 1)
        title = Text(strings.LOGS_TITLE.center(region.width, "─"), no_wrap=True)
        lines = [format_record(record) for record in self.visible_records()]
        return Group(title, *lines)


def setup_logging(level: int | str = logging.DEBUG, log_file: Path | None = None) -> LogBuffer:
    """Configure the root logger and return the overlay buffer.

    Safe to call repeatedly; existing root handlers are replaced. Nothing is
    written to the terminal while the UI owns it.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper().strip(), logging.DEBUG)

    buffer = LogBuffer()
    buffer.setLevel(level)
    buffer.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers = []
    root.setLevel(level)
    root.addHandler(buffer)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    logging.getLogger("dbmanager").info(
        "logging enabled (level=%s, file=%s)",
        logging.getLevelName(level),
        os.fspath(log_file) if log_file else None,
    )
    return buffer

"""In-memory log buffer feeding the form's log panel."""

from __future__ import annotations

import logging
import threading
from collections import deque

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Panel colours per level name
LEVEL_STYLES = {
    "DEBUG": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


class LogBuffer(logging.Handler):
    """Logging handler that keeps the most recent formatted records.

    Usage:
        buffer = LogBuffer(capacity=200)
        logging.getLogger("pretty_tui").addHandler(buffer)
        lines = buffer.messages()
    """

    def __init__(self, capacity: int = 500, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._lines: deque[str] = deque(maxlen=capacity)
        self._guard = threading.Lock()
        self.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    @property
    def capacity(self) -> int:
        return self._lines.maxlen or 0

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._guard:
            self._lines.extend(line.splitlines() or [""])

    def messages(self) -> list[str]:
        """Snapshot of buffered lines, oldest first."""
        with self._guard:
            return list(self._lines)

    def clear(self) -> None:
        with self._guard:
            self._lines.clear()


def level_style(line: str) -> str:
    """Colour for a ``LOG_FORMAT`` line, judged by its level name."""
    parts = line.split(" ", 2)
    if len(parts) < 2:
        return ""
    return LEVEL_STYLES.get(parts[1], "")


def setup_logging(level: str = "INFO", buffer: LogBuffer | None = None) -> LogBuffer:
    """Route the package logger into ``buffer`` (created if not given)."""
    buffer = buffer or LogBuffer()
    root = logging.getLogger("pretty_tui")
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        if isinstance(handler, LogBuffer) and handler is not buffer:
            root.removeHandler(handler)
    if buffer not in root.handlers:
        root.addHandler(buffer)
    # Stderr is hidden behind the alternate screen
    root.propagate = False
    return buffer

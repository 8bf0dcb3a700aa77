"""Logging setup and the in-memory debug history.

Every module logs through ``logging.getLogger(__name__)`` under the
``budgetsheet`` logger. The CLI attaches a rich console handler and a
DebugHistory, a handler that keeps the most recent formatted records in a
fixed-capacity ring buffer.
"""

import logging
from collections import deque
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "budgetsheet"
DEFAULT_HISTORY_SIZE = 1000
HISTORY_FORMAT = "[DEBUG %(asctime)s] %(name)s: %(message)s"


class DebugHistory(logging.Handler):
    """Logging handler that keeps the last ``capacity`` formatted records."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[str] = deque(maxlen=capacity)
        self.setFormatter(logging.Formatter(HISTORY_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._entries.append(self.format(record))
        except Exception:
            self.handleError(record)

    def entries(self) -> list[str]:
        """Recorded entries, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def configure_logging(
    debug: bool = False,
    history_size: int = DEFAULT_HISTORY_SIZE,
    console: Console | None = None,
) -> DebugHistory:
    """Attach console and history handlers to the budgetsheet logger.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        debug: Show DEBUG records on the console (otherwise WARNING and up).
        history_size: Capacity of the debug history.
        console: Console for the rich handler. Defaults to stderr.

    Returns:
        The installed DebugHistory.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, (DebugHistory, RichHandler)):
            logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        level=logging.DEBUG if debug else logging.WARNING,
        show_path=False,
    )
    history = DebugHistory(history_size)

    logger.setLevel(logging.DEBUG)
    logger.addHandler(rich_handler)
    logger.addHandler(history)

    return history


def write_history(history: DebugHistory, path: Path) -> None:
    """Append the recorded entries to a log file."""
    entries = history.entries()
    if not entries:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n".join(entries) + "\n")

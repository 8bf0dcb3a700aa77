"""Translation of storage exceptions into budgetsheet errors."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from budgetsheet.errors import PersistenceFailure

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise sqlite and filesystem errors as PersistenceFailure.

    Args:
        action: What was being done, for the message (e.g. "saving budget").
    """
    try:
        yield
    except sqlite3.Error as e:
        logger.error("Database error while %s: %s", action, e)
        raise PersistenceFailure(f"Database error while {action}: {e}") from e
    except OSError as e:
        logger.error("Filesystem error while %s: %s", action, e)
        raise PersistenceFailure(f"Filesystem error while {action}: {e}") from e

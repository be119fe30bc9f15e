"""
Secondary Effects

Bookkeeping and cleanup steps whose failure must not change the outcome of
the operation that triggered them (removing a deleted document's file,
marking a download token as used, removing an orphaned upload).
"""

import logging
from contextlib import contextmanager
from typing import Iterator


@contextmanager
def best_effort(logger: logging.Logger, description: str) -> Iterator[None]:
    """
    Run a secondary effect, logging and discarding any failure.

    Args:
        logger: Logger that receives the warning
        description: Human readable name of the effect, used in the log line

    Example:
        >>> with best_effort(logger, f"delete file {path}"):
        ...     storage.delete(path)
    """
    try:
        yield
    except Exception as e:
        logger.warning(f"Best-effort step failed ({description}): {e}")

"""
Clock helpers.

All timestamps in the domain are naive UTC datetimes, which is also what
the relational store hands back.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)

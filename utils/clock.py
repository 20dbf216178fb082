"""
Time source passed explicitly to everything that needs "now".
Tests inject a fixed clock instead of patching datetime.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns the same moment."""
    return lambda: moment


def get_clock() -> Clock:
    """FastAPI dependency; overridden in tests with a fixed clock."""
    return utc_now

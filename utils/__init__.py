"""Shared utilities for the backend."""
from utils.clock import Clock, fixed_clock, get_clock, utc_now

__all__ = [
    "Clock",
    "fixed_clock",
    "get_clock",
    "utc_now",
]

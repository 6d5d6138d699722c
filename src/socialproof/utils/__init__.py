"""Common utility functions and helpers for the socialproof package."""

from socialproof.utils.time import Clock, ManualClock, SystemClock, TimeUtils

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "TimeUtils",
]

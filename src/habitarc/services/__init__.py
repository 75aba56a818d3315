"""Service module exports."""

from . import habits, stats

__all__ = [
    "habits",
    "stats",
]

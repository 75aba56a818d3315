"""habitarc: habit streak and completion-rate tracking."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .services.habits import StreakResult, compute_completion_rate, compute_streaks, weekly_progress

__all__ = [
    "BaseConfig",
    "DevConfig",
    "StreakResult",
    "compute_completion_rate",
    "compute_streaks",
    "weekly_progress",
]

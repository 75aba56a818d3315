"""SQLModel table exports."""

from .habit import Habit, HabitLog, StreakFreeze, WeeklyTarget

__all__ = [
    "Habit",
    "HabitLog",
    "StreakFreeze",
    "WeeklyTarget",
]

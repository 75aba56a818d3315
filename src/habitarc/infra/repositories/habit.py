"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Mapping, Optional

from sqlmodel import Session, select

from ...config import BaseConfig
from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog, StreakFreeze, WeeklyTarget
from ...services.habits import StreakResult, compute_completion_rate, compute_streaks

logger = get_logger("infra.repositories.habit")


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_active(
        self, *, user_id: int, today: date, cadence: Optional[str] = None
    ) -> list[Habit]:
        """List non-archived habits that have started by ``today``."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .where(Habit.is_archived == False)  # noqa: E712
                .where(Habit.start_date <= today)
                .order_by(Habit.order, Habit.name)  # type: ignore
            )
            if cadence is not None:
                statement = statement.where(Habit.cadence == cadence)

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_archived(self, *, user_id: int) -> list[Habit]:
        """List archived habits, most recently created first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .where(Habit.is_archived == True)  # noqa: E712
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        name = (habit.name or "").strip()
        if not name:
            raise ValueError("Habit name cannot be empty")
        if len(name) > BaseConfig.MAX_HABIT_NAME_LENGTH:
            raise ValueError(
                f"Habit name must be at most {BaseConfig.MAX_HABIT_NAME_LENGTH} characters"
            )
        with self.session_factory() as session:
            habit.name = name
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Habit created", extra={"habit_id": habit.id, "cadence": habit.cadence})
            return habit

    def _set_archived(self, habit_id: int, archived: bool, user_id: int) -> Habit:
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                raise ValueError("Habit not found")
            habit.is_archived = archived
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info(
                "Habit archived" if archived else "Habit restored", extra={"habit_id": habit_id}
            )
            return habit

    def archive(self, habit_id: int, *, user_id: int) -> Habit:
        """Hide a habit from the active lists while keeping its history."""
        return self._set_archived(habit_id, True, user_id)

    def restore(self, habit_id: int, *, user_id: int) -> Habit:
        """Bring an archived habit back to the active lists."""
        return self._set_archived(habit_id, False, user_id)

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit together with its logs, freezes and weekly targets."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return
            for model in (HabitLog, StreakFreeze, WeeklyTarget):
                for row in session.exec(select(model).where(model.habit_id == habit_id)).all():
                    session.delete(row)
            session.flush()
            session.delete(habit)
            session.commit()
            logger.info("Habit deleted", extra={"habit_id": habit_id})

    def reorder(self, orders: Mapping[int, int], *, user_id: int) -> None:
        """Apply ``{habit_id: order}``; ids the user does not own are ignored."""
        if not orders:
            return
        with self.session_factory() as session:
            habits = session.exec(
                select(Habit).where(Habit.user_id == user_id).where(Habit.id.in_(list(orders)))  # type: ignore
            ).all()
            for habit in habits:
                habit.order = orders[habit.id]
                session.add(habit)
            session.commit()
            logger.info("Habits reordered", extra={"count": len(habits)})

    # Log operations
    def get_logs(
        self,
        habit_id: int,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HabitLog]:
        """Get logs for a habit, newest first, optionally within a date range."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.user_id == user_id)
                .where(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.occurred_on.desc())  # type: ignore
            )
            if start_date is not None:
                statement = statement.where(HabitLog.occurred_on >= start_date)
            if end_date is not None:
                statement = statement.where(HabitLog.occurred_on <= end_date)

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_logs_for_date(self, day: date, *, user_id: int) -> list[HabitLog]:
        """Get every habit's log for one day."""
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(HabitLog)
                    .where(HabitLog.user_id == user_id)
                    .where(HabitLog.occurred_on == day)
                ).all()
            )
            session.expunge_all()
            return rows

    def _find_log(self, session: Session, habit_id: int, day: date, user_id: int) -> Optional[HabitLog]:
        return session.exec(
            select(HabitLog)
            .where(HabitLog.user_id == user_id)
            .where(HabitLog.habit_id == habit_id)
            .where(HabitLog.occurred_on == day)
        ).first()

    def upsert_log(self, habit_id: int, day: date, completed: bool, *, user_id: int) -> HabitLog:
        """Insert or overwrite the log for a day."""
        with self.session_factory() as session:
            log = self._find_log(session, habit_id, day, user_id)
            if log is None:
                log = HabitLog(habit_id=habit_id, occurred_on=day, user_id=user_id, completed=completed)
            else:
                log.completed = completed
            session.add(log)
            session.commit()
            session.refresh(log)
            session.expunge(log)
            logger.info(
                "Habit logged",
                extra={"habit_id": habit_id, "day": day.isoformat(), "completed": completed},
            )
            return log

    def delete_log(self, habit_id: int, day: date, *, user_id: int) -> None:
        """Delete the log for a day."""
        with self.session_factory() as session:
            log = self._find_log(session, habit_id, day, user_id)
            if log:
                session.delete(log)
                session.commit()
                logger.info("Habit log deleted", extra={"habit_id": habit_id, "day": day.isoformat()})

    # Freeze operations
    def get_freezes(self, habit_id: int, *, user_id: int) -> list[StreakFreeze]:
        """Get freezes for a habit, newest first."""
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(StreakFreeze)
                    .where(StreakFreeze.user_id == user_id)
                    .where(StreakFreeze.habit_id == habit_id)
                    .order_by(StreakFreeze.occurred_on.desc())  # type: ignore
                ).all()
            )
            session.expunge_all()
            return rows

    def _find_freeze(
        self, session: Session, habit_id: int, day: date, user_id: int
    ) -> Optional[StreakFreeze]:
        return session.exec(
            select(StreakFreeze)
            .where(StreakFreeze.user_id == user_id)
            .where(StreakFreeze.habit_id == habit_id)
            .where(StreakFreeze.occurred_on == day)
        ).first()

    def add_freeze(self, habit_id: int, day: date, *, user_id: int) -> StreakFreeze:
        """Freeze a day; freezing an already frozen day is a no-op."""
        with self.session_factory() as session:
            freeze = self._find_freeze(session, habit_id, day, user_id)
            if freeze is None:
                freeze = StreakFreeze(habit_id=habit_id, occurred_on=day, user_id=user_id)
                session.add(freeze)
                session.commit()
                session.refresh(freeze)
                logger.info("Streak freeze added", extra={"habit_id": habit_id, "day": day.isoformat()})
            session.expunge(freeze)
            return freeze

    def remove_freeze(self, habit_id: int, day: date, *, user_id: int) -> None:
        """Remove the freeze for a day."""
        with self.session_factory() as session:
            freeze = self._find_freeze(session, habit_id, day, user_id)
            if freeze:
                session.delete(freeze)
                session.commit()
                logger.info("Streak freeze removed", extra={"habit_id": habit_id, "day": day.isoformat()})

    # Weekly targets
    def get_weekly_target(
        self, habit_id: int, week_start: date, *, user_id: int
    ) -> Optional[WeeklyTarget]:
        """Get the target set for a week."""
        with self.session_factory() as session:
            obj = session.exec(
                select(WeeklyTarget)
                .where(WeeklyTarget.user_id == user_id)
                .where(WeeklyTarget.habit_id == habit_id)
                .where(WeeklyTarget.week_start == week_start)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def set_weekly_target(
        self, habit_id: int, week_start: date, target: int, *, user_id: int
    ) -> WeeklyTarget:
        """Insert or overwrite the target for a week."""
        with self.session_factory() as session:
            existing = session.exec(
                select(WeeklyTarget)
                .where(WeeklyTarget.user_id == user_id)
                .where(WeeklyTarget.habit_id == habit_id)
                .where(WeeklyTarget.week_start == week_start)
            ).first()
            if existing:
                existing.target = target
                row = existing
            else:
                row = WeeklyTarget(habit_id=habit_id, week_start=week_start, target=target, user_id=user_id)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    # Derived statistics
    def _require_habit(self, habit_id: int, user_id: int) -> Habit:
        habit = self.get_by_id(habit_id, user_id=user_id)
        if habit is None:
            raise ValueError("Habit not found")
        return habit

    def get_streaks(self, habit_id: int, *, user_id: int, today: date) -> StreakResult:
        """Calculate current and longest streak for a habit."""
        habit = self._require_habit(habit_id, user_id)
        logs = self.get_logs(habit_id, user_id=user_id, end_date=today)
        freezes = self.get_freezes(habit_id, user_id=user_id)
        return compute_streaks(logs, freezes, habit.start_date, today)

    def get_completion_rate(self, habit_id: int, *, user_id: int, today: date) -> int:
        """Calculate the completion percentage for a habit."""
        habit = self._require_habit(habit_id, user_id)
        logs = self.get_logs(habit_id, user_id=user_id, end_date=today)
        return compute_completion_rate(logs, habit.start_date, today)

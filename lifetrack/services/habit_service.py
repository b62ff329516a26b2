"""
Habit scheduling and logging.
HabitScheduler holds the pure frequency/streak rules; HabitService owns the
stored templates and logs.
"""
import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from lifetrack.constants import (
    DEFAULT_FIRST_WEEKDAY,
    FREQUENCY_SPECIFIC_WEEKDAYS,
    KEY_HABIT_LOGS,
    KEY_HABIT_TEMPLATES,
)
from lifetrack.defaults import default_core_habits
from lifetrack.exceptions import CoreHabitDeletionException, HabitNotFoundException
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import (
    HabitCategory,
    HabitLog,
    HabitSnapshot,
    HabitTemplate,
)
from lifetrack.services.date_service import DateService
from lifetrack.services.score_service import habit_completion_ratio
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.habits")


class HabitScheduler:
    """Pure rules mapping frequency rules and logs to calendar days"""

    @staticmethod
    def is_active_on(habit: HabitTemplate, target_date: date) -> bool:
        """
        Whether a habit applies on a calendar day.

        daily, weekly_count and custom habits apply every day; a weekly
        count is graded over the week, not per day. specific_weekdays
        applies only on the listed weekdays (1 = Sunday ... 7 = Saturday).
        """
        if habit.frequency.kind == FREQUENCY_SPECIFIC_WEEKDAYS:
            return DateService.weekday(target_date) in habit.frequency.weekdays
        return True

    @staticmethod
    def habits_for(habits: Iterable[HabitTemplate], target_date: date) -> List[HabitTemplate]:
        """Active habits that apply on target_date (the day's denominator)"""
        return [
            habit for habit in habits
            if habit.is_active and HabitScheduler.is_active_on(habit, target_date)
        ]

    @staticmethod
    def log_for(logs: Iterable[HabitLog], habit_id: str, target_date: date) -> Optional[HabitLog]:
        for log in logs:
            if log.habit_id == habit_id and log.date == target_date:
                return log
        return None

    @staticmethod
    def is_completed_on(logs: Iterable[HabitLog], habit_id: str, target_date: date) -> bool:
        log = HabitScheduler.log_for(logs, habit_id, target_date)
        return log is not None and log.completed

    @staticmethod
    def streak(habit_id: str, logs: Iterable[HabitLog], as_of: date) -> int:
        """
        Count consecutive completed days walking backward from as_of.

        An unlogged as_of breaks the streak at 0; it is not skipped.

        Args:
            habit_id: Habit to count
            logs: Habit logs (any habits)
            as_of: Last day of the streak

        Returns:
            Number of consecutive completed days
        """
        completed_days = [
            log.date for log in logs
            if log.habit_id == habit_id and log.completed
        ]
        return DateService.consecutive_days(completed_days, as_of)

    @staticmethod
    def weekly_completion_count(
        habit_id: str,
        logs: Iterable[HabitLog],
        week_of: date,
        first_weekday: int = DEFAULT_FIRST_WEEKDAY
    ) -> int:
        """Number of completed days in the week containing week_of"""
        week_start, week_end = DateService.week_range(week_of, first_weekday)
        return len({
            log.date for log in logs
            if log.habit_id == habit_id
            and log.completed
            and week_start <= log.date <= week_end
        })


class HabitService:
    """Service for habit templates and daily habit logs"""

    def __init__(
        self,
        store: DocumentStore,
        seed_defaults: bool = True,
        now: Optional[datetime] = None,
        first_weekday: int = DEFAULT_FIRST_WEEKDAY
    ):
        self.habit_repo = CollectionRepository(store, KEY_HABIT_TEMPLATES, HabitTemplate)
        self.log_repo = CollectionRepository(store, KEY_HABIT_LOGS, HabitLog)
        self.seed_defaults = seed_defaults
        self.first_weekday = first_weekday
        self.habits: List[HabitTemplate] = []
        self.logs: List[HabitLog] = []
        self.load_data(now)

    def load_data(self, now: Optional[datetime] = None) -> None:
        """Load templates (seeding core habits on first launch) and logs"""
        seed_time = now or datetime.now()
        seed = (lambda: default_core_habits(seed_time)) if self.seed_defaults else None
        self.habits = self.habit_repo.load_all(seed)
        self.logs = self.log_repo.load_all()

    # Template views

    @property
    def active_habits(self) -> List[HabitTemplate]:
        return [habit for habit in self.habits if habit.is_active]

    @property
    def core_habits(self) -> List[HabitTemplate]:
        return [habit for habit in self.habits if habit.is_core]

    @property
    def custom_habits(self) -> List[HabitTemplate]:
        return [habit for habit in self.habits if not habit.is_core]

    def habits_by_category(self) -> Dict[HabitCategory, List[HabitTemplate]]:
        grouped: Dict[HabitCategory, List[HabitTemplate]] = {}
        for habit in self.active_habits:
            grouped.setdefault(habit.category, []).append(habit)
        return grouped

    def get_habit(self, habit_id: str) -> HabitTemplate:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        raise HabitNotFoundException(habit_id)

    def habits_for(self, target_date: date) -> List[HabitTemplate]:
        return HabitScheduler.habits_for(self.habits, target_date)

    # Template management

    def add_habit(self, habit: HabitTemplate) -> HabitTemplate:
        with self.habit_repo.lock:
            self.habits.append(habit)
            self.habit_repo.save_all(self.habits)
        return habit

    def update_habit(self, habit: HabitTemplate) -> HabitTemplate:
        self.get_habit(habit.id)
        return self._replace(habit.model_copy(update={"updated_at": datetime.now()}))

    def toggle_habit_active(self, habit_id: str) -> HabitTemplate:
        habit = self.get_habit(habit_id)
        return self._replace(habit.model_copy(update={
            "is_active": not habit.is_active,
            "updated_at": datetime.now(),
        }))

    def archive_habit(self, habit_id: str) -> HabitTemplate:
        habit = self.get_habit(habit_id)
        return self._replace(habit.model_copy(update={
            "is_active": False,
            "updated_at": datetime.now(),
        }))

    def delete_habit(self, habit_id: str) -> None:
        """
        Delete a custom habit and its logs.

        Raises:
            CoreHabitDeletionException: If the habit is a core habit
        """
        habit = self.get_habit(habit_id)
        if habit.is_core:
            raise CoreHabitDeletionException(habit_id)

        with self.habit_repo.lock:
            self.habits = [h for h in self.habits if h.id != habit_id]
            self.habit_repo.save_all(self.habits)
        with self.log_repo.lock:
            self.logs = [log for log in self.logs if log.habit_id != habit_id]
            self.log_repo.save_all(self.logs)
        logger.info(f"Deleted habit '{habit.title}'")

    # Logging

    def log_for(self, habit_id: str, target_date: date) -> Optional[HabitLog]:
        return HabitScheduler.log_for(self.logs, habit_id, DateService.to_date(target_date))

    def toggle_completion(self, habit_id: str, target_date: date) -> HabitLog:
        """
        Toggle a habit for a day.

        Creates a completed log when none exists, otherwise flips the
        existing log in place.
        """
        self.get_habit(habit_id)
        target_date = DateService.to_date(target_date)

        with self.log_repo.lock:
            existing = self.log_for(habit_id, target_date)
            if existing is None:
                log = HabitLog(habit_id=habit_id, date=target_date, completed=True)
                self.logs.append(log)
            else:
                log = existing.model_copy(update={"completed": not existing.completed})
                self._replace_log(log)
            self.log_repo.save_all(self.logs)
        return log

    def update_habit_log(
        self,
        habit_id: str,
        target_date: date,
        numeric_value: Optional[float] = None,
        duration_minutes: Optional[int] = None,
        note: Optional[str] = None
    ) -> HabitLog:
        """
        Record a value for a habit on a day.

        A numeric value marks the log completed if and only if it reaches
        the habit's target (when the habit has one). Duration and note
        never change completion.

        Args:
            habit_id: ID of the habit
            target_date: Day to log
            numeric_value: Value for numeric habits
            duration_minutes: Minutes for duration habits
            note: Free-text note

        Returns:
            The created or updated log
        """
        habit = self.get_habit(habit_id)
        target_date = DateService.to_date(target_date)

        updates = {}
        if numeric_value is not None:
            updates["numeric_value"] = numeric_value
            if habit.target_value is not None:
                updates["completed"] = numeric_value >= habit.target_value
        if duration_minutes is not None:
            updates["duration_minutes"] = duration_minutes
        if note is not None:
            updates["note"] = note

        with self.log_repo.lock:
            existing = self.log_for(habit_id, target_date)
            if existing is None:
                log = HabitLog(habit_id=habit_id, date=target_date, **updates)
                self.logs.append(log)
            else:
                log = existing.model_copy(update=updates)
                self._replace_log(log)
            self.log_repo.save_all(self.logs)
        return log

    # Statistics

    def completed_count(self, target_date: date) -> int:
        target_date = DateService.to_date(target_date)
        return sum(
            1 for habit in self.habits_for(target_date)
            if HabitScheduler.is_completed_on(self.logs, habit.id, target_date)
        )

    def completion_rate(self, target_date: date) -> float:
        """Completed share of the day's applicable habits (0 with none)"""
        target_date = DateService.to_date(target_date)
        return habit_completion_ratio(
            self.completed_count(target_date), len(self.habits_for(target_date))
        )

    def streak(self, habit_id: str, as_of: date) -> int:
        return HabitScheduler.streak(habit_id, self.logs, DateService.to_date(as_of))

    def weekly_completion_count(
        self,
        habit_id: str,
        week_of: date,
        first_weekday: Optional[int] = None
    ) -> int:
        """Completed days in the week containing week_of (profile week start by default)"""
        return HabitScheduler.weekly_completion_count(
            habit_id, self.logs, DateService.to_date(week_of), first_weekday or self.first_weekday
        )

    def snapshot(self) -> HabitSnapshot:
        return HabitSnapshot(habits=self.active_habits, logs=list(self.logs))

    def _replace(self, updated: HabitTemplate) -> HabitTemplate:
        with self.habit_repo.lock:
            self.habits = [updated if h.id == updated.id else h for h in self.habits]
            self.habit_repo.save_all(self.habits)
        return updated

    def _replace_log(self, updated: HabitLog) -> None:
        self.logs = [updated if log.id == updated.id else log for log in self.logs]

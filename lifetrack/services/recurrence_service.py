"""
Recurrence calculation for cleaning tasks.
Derives next-due date, overdue/due-today/snoozed flags and today's rotation.
All functions are pure: "now" is always passed in.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from lifetrack.constants import (
    MAX_DAILY_CLEANING_TASKS,
    RECURRENCE_CUSTOM,
    RECURRENCE_INTERVAL_DAYS,
)
from lifetrack.schemas import CleaningTask, RecurrenceRule
from lifetrack.services.date_service import DateService


class RecurrenceService:
    """Service for recurring task due-date operations"""

    @staticmethod
    def interval_days(rule: RecurrenceRule) -> int:
        """Number of days between occurrences for a recurrence rule."""
        if rule.kind == RECURRENCE_CUSTOM:
            return rule.days
        return RECURRENCE_INTERVAL_DAYS[rule.kind]

    @staticmethod
    def next_due_date(task: CleaningTask, now: Optional[datetime] = None) -> datetime:
        """
        Calculate when a task is next due.

        A task that was never completed is due at its creation time.
        Otherwise it is due interval_days calendar days after the last
        completion.

        Args:
            task: Cleaning task
            now: Current time (unused; kept for a uniform signature)

        Returns:
            Next due datetime
        """
        if task.last_completed_date is None:
            return task.created_at
        return DateService.add_days(
            task.last_completed_date,
            RecurrenceService.interval_days(task.recurrence)
        )

    @staticmethod
    def is_overdue(task: CleaningTask, now: datetime) -> bool:
        """Strict comparison of the due instant against the wall clock."""
        return RecurrenceService.next_due_date(task, now) < now

    @staticmethod
    def is_snoozed(task: CleaningTask, now: datetime) -> bool:
        return task.snoozed_until is not None and task.snoozed_until > now

    @staticmethod
    def is_due_today(task: CleaningTask, now: datetime) -> bool:
        """
        Due today if the due date falls on today's calendar date or the
        task is overdue. A snoozed task is never due today.
        """
        if RecurrenceService.is_snoozed(task, now):
            return False
        due = RecurrenceService.next_due_date(task, now)
        return due.date() == now.date() or due < now

    @staticmethod
    def days_until_due(task: CleaningTask, now: datetime) -> Optional[int]:
        """
        Whole days from now until the due instant, truncated toward zero.
        Negative for tasks overdue by a day or more.
        """
        due = RecurrenceService.next_due_date(task, now)
        return int((due - now) / timedelta(days=1))

    @staticmethod
    def select_tasks_for_today(
        tasks: Iterable[CleaningTask],
        now: datetime,
        limit: int = MAX_DAILY_CLEANING_TASKS
    ) -> List[CleaningTask]:
        """
        Select today's cleaning rotation.

        Active, non-snoozed tasks that are due today, sorted overdue first
        and then by days until due (missing info counts as 0), capped at
        limit.

        Args:
            tasks: All cleaning tasks
            now: Current time
            limit: Maximum tasks to return

        Returns:
            Tasks to show today
        """
        available = [
            task for task in tasks
            if task.is_active and RecurrenceService.is_due_today(task, now)
        ]

        def sort_key(task: CleaningTask) -> tuple[int, int]:
            overdue_rank = 0 if RecurrenceService.is_overdue(task, now) else 1
            days = RecurrenceService.days_until_due(task, now)
            return overdue_rank, days if days is not None else 0

        return sorted(available, key=sort_key)[:limit]

    @staticmethod
    def complete(task: CleaningTask, now: datetime) -> CleaningTask:
        """Return the task marked completed at now, with any snooze cleared."""
        return task.model_copy(update={
            "last_completed_date": now,
            "snoozed_until": None,
            "updated_at": now,
        })

    @staticmethod
    def snooze(task: CleaningTask, until: datetime, now: datetime) -> CleaningTask:
        """Return the task snoozed until the given time."""
        return task.model_copy(update={"snoozed_until": until, "updated_at": now})

    @staticmethod
    def snooze_one_day(task: CleaningTask, now: datetime) -> CleaningTask:
        """Return the task snoozed until the same time tomorrow."""
        return RecurrenceService.snooze(task, DateService.add_days(now, 1), now)

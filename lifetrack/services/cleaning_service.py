"""
Cleaning task management service.
Handles the task rotation, completion history and snoozing.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from lifetrack.constants import (
    KEY_CLEANING_LOGS,
    KEY_CLEANING_TASKS,
    MAX_DAILY_CLEANING_TASKS,
)
from lifetrack.defaults import default_cleaning_tasks
from lifetrack.exceptions import CleaningTaskNotFoundException
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import CleaningLog, CleaningSnapshot, CleaningTask
from lifetrack.services.date_service import DateService
from lifetrack.services.recurrence_service import RecurrenceService
from lifetrack.services.score_service import cleaning_completion_ratio
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.cleaning")


class CleaningService:
    """Service for cleaning tasks and their completion logs"""

    def __init__(self, store: DocumentStore, seed_defaults: bool = True, now: Optional[datetime] = None):
        self.task_repo = CollectionRepository(store, KEY_CLEANING_TASKS, CleaningTask)
        self.log_repo = CollectionRepository(store, KEY_CLEANING_LOGS, CleaningLog)
        self.seed_defaults = seed_defaults
        self.tasks: List[CleaningTask] = []
        self.logs: List[CleaningLog] = []
        self.load_data(now)

    def load_data(self, now: Optional[datetime] = None) -> None:
        """Load tasks (seeding the default rotation on first launch) and logs"""
        seed_time = now or datetime.now()
        seed = (lambda: default_cleaning_tasks(seed_time)) if self.seed_defaults else None
        self.tasks = self.task_repo.load_all(seed)
        self.logs = self.log_repo.load_all()

    # Task views

    @property
    def active_tasks(self) -> List[CleaningTask]:
        return [task for task in self.tasks if task.is_active]

    @property
    def archived_tasks(self) -> List[CleaningTask]:
        return [task for task in self.tasks if not task.is_active]

    def get_task(self, task_id: str) -> CleaningTask:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise CleaningTaskNotFoundException(task_id)

    def tasks_for_today(self, now: Optional[datetime] = None) -> List[CleaningTask]:
        """Today's rotation: overdue first, then soonest due, at most 3"""
        now = now or datetime.now()
        return RecurrenceService.select_tasks_for_today(self.tasks, now)

    def overdue_tasks(self, now: Optional[datetime] = None) -> List[CleaningTask]:
        now = now or datetime.now()
        return [
            task for task in self.active_tasks
            if RecurrenceService.is_overdue(task, now)
            and not RecurrenceService.is_snoozed(task, now)
        ]

    def due_today_tasks(self, now: Optional[datetime] = None) -> List[CleaningTask]:
        now = now or datetime.now()
        return [
            task for task in self.active_tasks
            if RecurrenceService.is_due_today(task, now)
        ]

    # Task management

    def add_task(self, task: CleaningTask) -> CleaningTask:
        with self.task_repo.lock:
            self.tasks.append(task)
            self.task_repo.save_all(self.tasks)
        return task

    def update_task(self, task: CleaningTask) -> CleaningTask:
        self.get_task(task.id)
        return self._replace(task.model_copy(update={"updated_at": datetime.now()}))

    def archive_task(self, task_id: str) -> CleaningTask:
        task = self.get_task(task_id)
        return self._replace(task.model_copy(update={
            "is_active": False,
            "updated_at": datetime.now(),
        }))

    def restore_task(self, task_id: str) -> CleaningTask:
        task = self.get_task(task_id)
        return self._replace(task.model_copy(update={
            "is_active": True,
            "updated_at": datetime.now(),
        }))

    def delete_task(self, task_id: str) -> None:
        """Hard delete; completion history is kept"""
        self.get_task(task_id)
        with self.task_repo.lock:
            self.tasks = [task for task in self.tasks if task.id != task_id]
            self.task_repo.save_all(self.tasks)

    # Completion and snoozing

    def complete_task(
        self,
        task_id: str,
        now: Optional[datetime] = None,
        duration_minutes: Optional[int] = None,
        note: Optional[str] = None
    ) -> CleaningLog:
        """
        Complete a task.

        Appends a log entry, sets last_completed_date to now and clears any
        snooze.

        Args:
            task_id: ID of the task
            now: Completion time
            duration_minutes: Optional time spent
            note: Optional note

        Returns:
            The new log entry
        """
        now = now or datetime.now()
        task = self.get_task(task_id)

        log = CleaningLog(
            task_id=task_id,
            completed_date=now,
            duration_minutes=duration_minutes,
            note=note
        )
        with self.log_repo.lock:
            self.logs.append(log)
            self.log_repo.save_all(self.logs)

        self._replace(RecurrenceService.complete(task, now))
        logger.info(f"Completed cleaning task '{task.title}'")
        return log

    def snooze_task(self, task_id: str, until: datetime, now: Optional[datetime] = None) -> CleaningTask:
        now = now or datetime.now()
        task = self.get_task(task_id)
        return self._replace(RecurrenceService.snooze(task, until, now))

    def snooze_task_for_one_day(self, task_id: str, now: Optional[datetime] = None) -> CleaningTask:
        now = now or datetime.now()
        task = self.get_task(task_id)
        return self._replace(RecurrenceService.snooze_one_day(task, now))

    def clear_snooze(self, task_id: str) -> CleaningTask:
        task = self.get_task(task_id)
        return self._replace(task.model_copy(update={
            "snoozed_until": None,
            "updated_at": datetime.now(),
        }))

    # Statistics

    def is_task_completed(self, task_id: str, on: date) -> bool:
        return is_completed_on(self.logs, task_id, on)

    def completed_tasks_count(self, on: date) -> int:
        """All completions logged on a day, including repeats"""
        day_start, day_end = DateService.get_day_range(on)
        return sum(1 for log in self.logs if day_start <= log.completed_date < day_end)

    def completion_rate(self, on: date, now: Optional[datetime] = None) -> float:
        """Share of the day's rotation completed; 1.0 if nothing is due"""
        rotation = todays_rotation(self.tasks, self.logs, on, now or datetime.now())
        completed = sum(1 for task in rotation if self.is_task_completed(task.id, on))
        return cleaning_completion_ratio(completed, len(rotation))

    def logs_for_task(self, task_id: str) -> List[CleaningLog]:
        """Completion history for a task, newest first"""
        logs = [log for log in self.logs if log.task_id == task_id]
        return sorted(logs, key=lambda log: log.completed_date, reverse=True)

    def snapshot(self, now: Optional[datetime] = None) -> CleaningSnapshot:
        return CleaningSnapshot(
            tasks=list(self.tasks),
            logs=list(self.logs),
            now=now or datetime.now()
        )

    def _replace(self, updated: CleaningTask) -> CleaningTask:
        with self.task_repo.lock:
            self.tasks = [updated if task.id == updated.id else task for task in self.tasks]
            self.task_repo.save_all(self.tasks)
        return updated


def is_completed_on(logs: List[CleaningLog], task_id: str, on: date) -> bool:
    """Whether any completion of the task was logged on the given day"""
    day_start, day_end = DateService.get_day_range(on)
    return any(
        log.task_id == task_id and day_start <= log.completed_date < day_end
        for log in logs
    )


def todays_rotation(
    tasks: List[CleaningTask],
    logs: List[CleaningLog],
    on: date,
    now: datetime,
    limit: int = MAX_DAILY_CLEANING_TASKS
) -> List[CleaningTask]:
    """
    The day's graded cleaning tasks.

    Tasks already completed on the day stay in the rotation ahead of the
    pending selection, so finishing a task does not remove it from the
    day's total. Capped at limit.
    """
    done = [
        task for task in tasks
        if task.is_active and is_completed_on(logs, task.id, on)
    ]
    done_ids = {task.id for task in done}
    pending = [
        task for task in RecurrenceService.select_tasks_for_today(tasks, now, limit)
        if task.id not in done_ids
    ]
    return (done + pending)[:limit]

"""
Daily aggregation.
Turns one day's habit, cleaning, water and reading data into the stored
DaySummary for that day (one record per calendar day, upserted).
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from lifetrack.constants import KEY_DAY_SUMMARIES
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import (
    CleaningSnapshot,
    DaySummary,
    HabitSnapshot,
    ReadingSnapshot,
    WaterSnapshot,
)
from lifetrack.services.cleaning_service import is_completed_on, todays_rotation
from lifetrack.services.date_service import DateService
from lifetrack.services.habit_service import HabitScheduler
from lifetrack.services.score_service import (
    calculate_score,
    cleaning_completion_ratio,
    habit_completion_ratio,
    water_completion_ratio,
)
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.day_summary")


class DaySummaryService:
    """Service for computing and storing day summaries"""

    def __init__(self, store: DocumentStore):
        self.repo = CollectionRepository(store, KEY_DAY_SUMMARIES, DaySummary)
        self.summaries: List[DaySummary] = []
        self.load_data()

    def load_data(self) -> None:
        self.summaries = self.repo.load_all()

    def summary_for_date(self, target_date: date) -> Optional[DaySummary]:
        target_date = DateService.to_date(target_date)
        for summary in self.summaries:
            if summary.date == target_date:
                return summary
        return None

    @staticmethod
    def compute_fields(
        target_date: date,
        habits: HabitSnapshot,
        cleaning: CleaningSnapshot,
        water: WaterSnapshot,
        reading: ReadingSnapshot
    ) -> Dict[str, Any]:
        """
        Derive a day's counts and score.

        Habits are graded against the habits applicable on target_date.
        Cleaning is graded against the day's rotation (capped at 3).
        Reading counts only sessions dated target_date.

        Args:
            target_date: Day being summarized
            habits: Active habits and habit logs
            cleaning: Cleaning tasks, logs and the time of selection
            water: The day's water log and target
            reading: Reading sessions

        Returns:
            DaySummary field values, including score
        """
        todays_habits = HabitScheduler.habits_for(habits.habits, target_date)
        habits_completed = sum(
            1 for habit in todays_habits
            if HabitScheduler.is_completed_on(habits.logs, habit.id, target_date)
        )

        rotation = todays_rotation(cleaning.tasks, cleaning.logs, target_date, cleaning.now)
        cleaning_completed = sum(
            1 for task in rotation
            if is_completed_on(cleaning.logs, task.id, target_date)
        )

        water_ounces = water.log.total_ounces if water.log else 0.0

        sessions = [s for s in reading.sessions if s.date == target_date]
        pages_read = sum(s.pages_read for s in sessions)
        minutes_read = sum(s.duration_minutes or 0 for s in sessions)

        score = calculate_score(
            habit_completion_ratio(habits_completed, len(todays_habits)),
            cleaning_completion_ratio(cleaning_completed, len(rotation)),
            water_completion_ratio(water_ounces, water.target),
            len(sessions) > 0
        )

        return {
            "habits_completed": habits_completed,
            "habits_total": len(todays_habits),
            "cleaning_tasks_completed": cleaning_completed,
            "cleaning_tasks_total": len(rotation),
            "water_ounces": water_ounces,
            "water_target": water.target,
            "pages_read": pages_read,
            "minutes_read": minutes_read,
            "score": score,
        }

    def update_summary(
        self,
        target_date: date,
        habits: HabitSnapshot,
        cleaning: CleaningSnapshot,
        water: WaterSnapshot,
        reading: ReadingSnapshot,
        now: Optional[datetime] = None
    ) -> DaySummary:
        """
        Recompute and upsert the summary for a day.

        The reflection note of an existing record is left untouched.

        Returns:
            The stored summary
        """
        target_date = DateService.to_date(target_date)
        fields = self.compute_fields(target_date, habits, cleaning, water, reading)
        summary = self._upsert(target_date, fields, now or datetime.now())
        logger.debug(f"Updated summary for {target_date}: score {summary.score:.1f}")
        return summary

    def update_reflection(self, target_date: date, note: str, now: Optional[datetime] = None) -> DaySummary:
        """Set a day's reflection note without recomputing its numbers"""
        target_date = DateService.to_date(target_date)
        return self._upsert(target_date, {"reflection_note": note}, now or datetime.now())

    def delete_summary(self, target_date: date) -> bool:
        """Explicitly reset a day; returns False if no record existed"""
        target_date = DateService.to_date(target_date)
        with self.repo.lock:
            remaining = [s for s in self.summaries if s.date != target_date]
            if len(remaining) == len(self.summaries):
                return False
            self.summaries = remaining
            self.repo.save_all(self.summaries)
        return True

    def _upsert(self, target_date: date, fields: Dict[str, Any], now: datetime) -> DaySummary:
        with self.repo.lock:
            existing = self.summary_for_date(target_date)
            if existing is None:
                summary = DaySummary(date=target_date, created_at=now, updated_at=now, **fields)
                self.summaries.append(summary)
            else:
                summary = existing.model_copy(update={**fields, "updated_at": now})
                self.summaries = [
                    summary if s.id == existing.id else s for s in self.summaries
                ]
            self.repo.save_all(self.summaries)
        return summary

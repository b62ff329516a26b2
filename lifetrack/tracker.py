"""
LifeTracker - wires every service over one document store.
"""
import logging
from datetime import date, datetime
from typing import Optional

from lifetrack.repositories.profile_repository import ProfileRepository
from lifetrack.schemas import DaySummary, UserProfile
from lifetrack.services.cleaning_service import CleaningService, todays_rotation
from lifetrack.services.day_summary_service import DaySummaryService
from lifetrack.services.export_service import ExportService
from lifetrack.services.goal_service import GoalService
from lifetrack.services.habit_service import HabitService
from lifetrack.services.history_service import HistoryService
from lifetrack.services.reading_service import ReadingService
from lifetrack.services.water_service import WaterService
from lifetrack.services.widget_service import WidgetService
from lifetrack.services.workout_service import WorkoutService
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack")


class LifeTracker:
    """Single owner of the in-memory state and sole writer of the store"""

    def __init__(self, store: DocumentStore, seed_defaults: bool = True, now: Optional[datetime] = None):
        self.store = store
        self.profile: UserProfile = ProfileRepository.get(store)
        first_weekday = self.profile.first_weekday

        self.habits = HabitService(
            store, seed_defaults=seed_defaults, now=now, first_weekday=first_weekday
        )
        self.cleaning = CleaningService(store, seed_defaults=seed_defaults, now=now)
        self.water = WaterService(store)
        self.reading = ReadingService(store)
        self.workouts = WorkoutService(store, first_weekday=first_weekday)
        self.goals = GoalService(store, seed_defaults=seed_defaults)
        self.day_summaries = DaySummaryService(store)
        self.history = HistoryService(store, first_weekday=first_weekday)
        self.widget = WidgetService(store)

    def update_summary(self, target_date: date, now: Optional[datetime] = None) -> DaySummary:
        """Recompute the stored summary for a day from the live collections"""
        now = now or datetime.now()
        return self.day_summaries.update_summary(
            target_date,
            self.habits.snapshot(),
            self.cleaning.snapshot(now),
            self.water.snapshot(target_date),
            self.reading.snapshot(target_date),
            now=now
        )

    def refresh_today(self, now: Optional[datetime] = None) -> DaySummary:
        """
        Recompute today's summary and publish the widget snapshot.

        Args:
            now: Current time (defaults to the wall clock)

        Returns:
            Today's summary
        """
        now = now or datetime.now()
        summary = self.update_summary(now.date(), now)

        pending = self.cleaning.tasks_for_today(now)
        self.widget.publish(self.widget.build(summary, pending[0] if pending else None, now))
        return summary

    def update_reflection(self, target_date: date, note: str) -> DaySummary:
        return self.day_summaries.update_reflection(target_date, note)

    def weekly_review(self, containing: date) -> str:
        """Markdown weekly review for the week containing a date"""
        week = self.history.weekly_summary(containing)
        notes = [day.reflection_note for day in week.days if day.reflection_note]
        return ExportService.weekly_review(
            self.goals.active_goals, week, self.reading.currently_reading, notes
        )

    def daily_export(self, target_date: date, now: Optional[datetime] = None) -> str:
        """Markdown summary of one day (recomputes the day first)"""
        now = now or datetime.now()
        summary = self.update_summary(target_date, now)

        habits = [
            (habit, self.habits.log_for(habit.id, target_date))
            for habit in self.habits.habits_for(target_date)
        ]
        rotation = todays_rotation(self.cleaning.tasks, self.cleaning.logs, target_date, now)
        cleaning = [
            (task, self.cleaning.is_task_completed(task.id, target_date))
            for task in rotation
        ]
        return ExportService.daily_export(summary, habits, cleaning, self.reading.primary_book)

    def update_profile(self, profile: UserProfile) -> UserProfile:
        """Save profile changes; week rollups pick up a new first weekday"""
        self.profile = ProfileRepository.update(self.store, profile)
        self.history.first_weekday = self.profile.first_weekday
        self.workouts.first_weekday = self.profile.first_weekday
        self.habits.first_weekday = self.profile.first_weekday
        if self.water.daily_target != self.profile.daily_water_target:
            self.water.update_daily_target(self.profile.daily_water_target)
        logger.info("Profile updated")
        return self.profile

"""
Workout and mobility logging service.
"""
import logging
from datetime import date
from typing import Dict, List, Optional

from lifetrack.constants import DEFAULT_FIRST_WEEKDAY, KEY_MOBILITY_LOGS, KEY_WORKOUTS
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import MobilityLog, WeeklyWorkoutSummary, Workout, WorkoutType
from lifetrack.services.date_service import DateService
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.workouts")


class WorkoutService:
    """Service for workouts and mobility sessions"""

    def __init__(self, store: DocumentStore, first_weekday: int = DEFAULT_FIRST_WEEKDAY):
        self.workout_repo = CollectionRepository(store, KEY_WORKOUTS, Workout)
        self.mobility_repo = CollectionRepository(store, KEY_MOBILITY_LOGS, MobilityLog)
        self.first_weekday = first_weekday
        self.workouts: List[Workout] = []
        self.mobility_logs: List[MobilityLog] = []
        self.load_data()

    def load_data(self) -> None:
        self.workouts = self._newest_first(self.workout_repo.load_all())
        self.mobility_logs = self._newest_first(self.mobility_repo.load_all())

    # Workouts

    def add_workout(self, workout: Workout) -> Workout:
        with self.workout_repo.lock:
            self.workouts = self._newest_first(self.workouts + [workout])
            self.workout_repo.save_all(self.workouts)
        return workout

    def update_workout(self, workout: Workout) -> Workout:
        with self.workout_repo.lock:
            self.workouts = [workout if w.id == workout.id else w for w in self.workouts]
            self.workout_repo.save_all(self.workouts)
        return workout

    def delete_workout(self, workout_id: str) -> None:
        with self.workout_repo.lock:
            self.workouts = [w for w in self.workouts if w.id != workout_id]
            self.workout_repo.save_all(self.workouts)

    def workouts_for(self, on: date) -> List[Workout]:
        return [w for w in self.workouts if w.date == on]

    def did_workout(self, on: date) -> bool:
        return len(self.workouts_for(on)) > 0

    def recent_workouts(self, limit: int = 10) -> List[Workout]:
        return self.workouts[:limit]

    # Mobility

    def log_mobility_session(
        self,
        duration_minutes: int,
        exercises_completed: int,
        total_exercises: int,
        notes: Optional[str] = None,
        on: Optional[date] = None
    ) -> MobilityLog:
        log = MobilityLog(
            date=on or date.today(),
            duration_minutes=duration_minutes,
            exercises_completed=exercises_completed,
            total_exercises=total_exercises,
            notes=notes
        )
        with self.mobility_repo.lock:
            self.mobility_logs = self._newest_first(self.mobility_logs + [log])
            self.mobility_repo.save_all(self.mobility_logs)
        logger.info(f"Logged mobility session ({exercises_completed}/{total_exercises} exercises)")
        return log

    def delete_mobility_log(self, log_id: str) -> None:
        with self.mobility_repo.lock:
            self.mobility_logs = [log for log in self.mobility_logs if log.id != log_id]
            self.mobility_repo.save_all(self.mobility_logs)

    def mobility_log_for(self, on: date) -> Optional[MobilityLog]:
        for log in self.mobility_logs:
            if log.date == on:
                return log
        return None

    def did_mobility(self, on: date) -> bool:
        return self.mobility_log_for(on) is not None

    # Weekly statistics

    def workouts_for_week(self, containing: date) -> List[Workout]:
        week_start, week_end = DateService.week_range(containing, self.first_weekday)
        return [w for w in self.workouts if week_start <= w.date <= week_end]

    def mobility_logs_for_week(self, containing: date) -> List[MobilityLog]:
        week_start, week_end = DateService.week_range(containing, self.first_weekday)
        return [log for log in self.mobility_logs if week_start <= log.date <= week_end]

    def weekly_summary(self, containing: date) -> WeeklyWorkoutSummary:
        """
        Summarize the week containing a date.

        Args:
            containing: Any day in the week

        Returns:
            WeeklyWorkoutSummary with counts, duration, estimated TSS and
            workouts per type
        """
        week_workouts = self.workouts_for_week(containing)
        by_type: Dict[WorkoutType, int] = {}
        for workout in week_workouts:
            by_type[workout.type] = by_type.get(workout.type, 0) + 1

        return WeeklyWorkoutSummary(
            week_start_date=DateService.week_start(containing, self.first_weekday),
            total_workouts=len(week_workouts),
            total_duration_minutes=sum(w.duration_minutes for w in week_workouts),
            total_tss=sum(w.estimated_tss for w in week_workouts),
            workouts_by_type=by_type,
            mobility_sessions_completed=len(self.mobility_logs_for_week(containing))
        )

    # Streaks

    def workout_streak(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return DateService.consecutive_days((w.date for w in self.workouts), today)

    def mobility_streak(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return DateService.consecutive_days((log.date for log in self.mobility_logs), today)

    @staticmethod
    def _newest_first(items):
        return sorted(items, key=lambda item: item.date, reverse=True)

"""
Tests for LifeTracker wiring, the widget snapshot and the refresh job.

Tests cover:
1. Today's summary recomputed from live collections
2. Widget snapshot publishing and fallback reads
3. Profile changes reaching week rollups and the water target
4. Scheduler job error handling and lifecycle
"""
import pytest
from datetime import date, timedelta

from lifetrack.constants import KEY_WIDGET_SNAPSHOT, MONDAY
from lifetrack.exceptions import StorageException
from lifetrack.repositories.profile_repository import ProfileRepository
from lifetrack.schemas import Book, HabitTemplate
from lifetrack.services import scheduler_service
from lifetrack.services.goal_service import GoalService
from lifetrack.services.widget_service import WidgetService
from lifetrack.tracker import LifeTracker


@pytest.fixture
def tracker(store, now, make_task):
    """Tracker with one done habit, two cleaning tasks (one done), water and reading"""
    tracker = LifeTracker(store, seed_defaults=False, now=now)

    habit = tracker.habits.add_habit(HabitTemplate(title="Meditate"))
    tracker.habits.toggle_completion(habit.id, now.date())

    floors = tracker.cleaning.add_task(make_task(title="Floors"))
    tracker.cleaning.add_task(make_task(title="Bathrooms", created_at=now - timedelta(days=3)))
    tracker.cleaning.complete_task(floors.id, now)

    tracker.water.add_water(50, now.date())

    book = tracker.reading.add_book(Book(title="Dune", total_pages=400))
    tracker.reading.start_reading(book.id, now)
    tracker.reading.log_reading(book.id, 10, now=now)
    return tracker


class TestRefreshToday:
    """Tests for refresh_today"""

    def test_summary(self, tracker, now):
        summary = tracker.refresh_today(now)

        assert summary.habits_completed == 1
        assert summary.habits_total == 1
        assert summary.cleaning_tasks_completed == 1
        assert summary.cleaning_tasks_total == 2
        assert summary.water_ounces == 50
        assert summary.pages_read == 10
        assert summary.score == 82.5

    def test_widget_snapshot(self, tracker, now):
        tracker.refresh_today(now)

        snapshot = WidgetService(tracker.store).read()

        assert snapshot.score == 82.5
        assert snapshot.habits_completed_count == 1
        assert snapshot.water_current == 50
        assert snapshot.did_read_today is True
        assert snapshot.next_cleaning_task_title == "Bathrooms"
        assert snapshot.generated_at == now

    def test_refresh_is_idempotent(self, tracker, now):
        tracker.refresh_today(now)
        tracker.refresh_today(now + timedelta(minutes=15))

        assert len(tracker.day_summaries.summaries) == 1

    def test_reflection_kept_on_refresh(self, tracker, now):
        tracker.update_reflection(now.date(), "Calm day")

        assert tracker.refresh_today(now).reflection_note == "Calm day"

    def test_history_sees_new_summary(self, tracker, now):
        tracker.refresh_today(now)

        assert tracker.history.current_streak(now.date()) == 1


class TestWidgetService:
    """Tests for widget snapshot reads and writes"""

    def test_missing_snapshot(self, store):
        assert WidgetService(store).read() is None

    def test_corrupt_snapshot(self, store):
        store.save_raw("{", KEY_WIDGET_SNAPSHOT)

        assert WidgetService(store).read() is None

    def test_build_without_summary(self, now):
        snapshot = WidgetService.build(None, None, now)

        assert snapshot.score == 0.0
        assert snapshot.next_cleaning_task_title is None

    def test_publish_failure_logged(self, store, now):
        class BrokenStore(type(store)):
            def save(self, value, key):
                raise StorageException("save", "read-only")

        assert WidgetService(BrokenStore()).publish(WidgetService.build(None, None, now)) is False


class TestExports:
    """Tests for the report entry points"""

    def test_daily_export(self, tracker, now):
        report = tracker.daily_export(now.date(), now)

        assert report.startswith("# Daily Summary - Jan 5, 2026")
        assert "✓ Meditate" in report
        assert "✓ Floors" in report
        assert "○ Bathrooms" in report
        assert "- Currently Reading: Dune" in report

    def test_weekly_review(self, tracker, now):
        tracker.refresh_today(now)
        tracker.update_reflection(now.date(), "Steady")

        report = tracker.weekly_review(now.date())

        assert "Jan 4, 2026 - Jan 10, 2026" in report
        assert "- **Days Tracked:** 1/7" in report
        assert "> Steady" in report


class TestProfile:
    """Tests for update_profile"""

    def test_first_weekday_reaches_rollups(self, tracker, now):
        profile = tracker.profile.model_copy(update={"first_weekday": MONDAY})

        tracker.update_profile(profile)

        assert tracker.history.weekly_summary(now.date()).start_date == now.date()
        assert tracker.workouts.weekly_summary(now.date()).week_start_date == now.date()

    def test_first_weekday_reaches_habit_weeks(self, tracker, now):
        """A Sunday Jan 11 completion lands in the Monday-start week of Jan 5"""
        habit = tracker.habits.habits[0]
        tracker.habits.toggle_completion(habit.id, date(2026, 1, 11))
        assert tracker.habits.weekly_completion_count(habit.id, now.date()) == 1

        tracker.update_profile(tracker.profile.model_copy(update={"first_weekday": MONDAY}))

        assert tracker.habits.weekly_completion_count(habit.id, now.date()) == 2

    def test_habit_week_from_stored_profile(self, store, now):
        profile = ProfileRepository.get(store)
        profile.first_weekday = MONDAY
        ProfileRepository.update(store, profile)

        tracker = LifeTracker(store, seed_defaults=False, now=now)

        assert tracker.habits.first_weekday == MONDAY

    def test_water_target_change(self, tracker):
        profile = tracker.profile.model_copy(update={"daily_water_target": 120})

        tracker.update_profile(profile)

        assert tracker.water.daily_target == 120


class TestGoals:
    """Tests for goals and KPIs"""

    def test_seeded_goals(self, store):
        service = GoalService(store)

        assert len(service.high_level_goals) == 3
        assert len(service.kpis) == 3

    def test_update_progress(self, store):
        service = GoalService(store)
        kpi = service.kpis[0]

        service.update_progress(kpi.id, 125)

        assert GoalService(store).get_goal(kpi.id).progress == 0.5


class FailingTracker:
    def refresh_today(self):
        raise StorageException("save", "locked")


class TestScheduler:
    """Tests for the periodic refresh job"""

    def test_run_refresh_swallows_errors(self):
        scheduler_service.run_refresh(FailingTracker())

    def test_run_refresh_updates_today(self, store):
        tracker = LifeTracker(store, seed_defaults=False)

        scheduler_service.run_refresh(tracker)

        assert WidgetService(store).read() is not None

    def test_start_and_stop(self, store):
        tracker = LifeTracker(store, seed_defaults=False)
        try:
            scheduler_service.start_scheduler(tracker, interval_minutes=60)

            assert scheduler_service.scheduler.running
            assert scheduler_service.scheduler.get_job(scheduler_service.REFRESH_JOB_ID) is not None
        finally:
            scheduler_service.stop_scheduler()

        assert not scheduler_service.scheduler.running

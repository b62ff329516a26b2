"""
Tests for DaySummaryService (daily aggregation).

Tests cover:
1. Counts and score from habit, cleaning, water and reading data
2. Zero-denominator defaults
3. Upsert by date and the independent reflection path
"""
import pytest
from datetime import datetime, timedelta

from lifetrack.constants import KEY_DAY_SUMMARIES
from lifetrack.schemas import (
    CleaningLog,
    CleaningSnapshot,
    HabitLog,
    HabitSnapshot,
    HabitTemplate,
    ReadingSession,
    ReadingSnapshot,
    SpecificWeekdaysFrequency,
    WaterEntry,
    WaterLog,
    WaterSnapshot,
)
from lifetrack.services.day_summary_service import DaySummaryService


@pytest.fixture
def habits():
    return [HabitTemplate(title="Meditate"), HabitTemplate(title="Stretch")]


@pytest.fixture
def empty_cleaning(now):
    return CleaningSnapshot(now=now)


@pytest.fixture
def no_water():
    return WaterSnapshot(log=None, target=100)


@pytest.fixture
def no_reading():
    return ReadingSnapshot()


def water(today, *amounts, target=100):
    log = WaterLog(date=today, entries=[WaterEntry(amount=a) for a in amounts], target_ounces=target)
    return WaterSnapshot(log=log, target=target)


def habit_snapshot(habits, today, completed):
    logs = [HabitLog(habit_id=h.id, date=today, completed=True) for h in completed]
    return HabitSnapshot(habits=habits, logs=logs)


class TestComputeFields:
    """Tests for the derived counts and score"""

    def test_perfect_day(self, store, habits, today, empty_cleaning):
        service = DaySummaryService(store)
        reading = ReadingSnapshot(sessions=[ReadingSession(book_id="b", date=today, pages_read=12, duration_minutes=20)])

        summary = service.update_summary(
            today, habit_snapshot(habits, today, habits), empty_cleaning, water(today, 60, 40), reading
        )

        assert summary.habits_completed == 2
        assert summary.habits_total == 2
        assert summary.water_ounces == 100
        assert summary.pages_read == 12
        assert summary.minutes_read == 20
        assert summary.score == 100.0

    def test_half_habits_no_tasks(self, store, habits, today, empty_cleaning, no_water, no_reading):
        """Half the habits plus full cleaning credit is 45"""
        service = DaySummaryService(store)

        summary = service.update_summary(
            today, habit_snapshot(habits, today, habits[:1]), empty_cleaning, no_water, no_reading
        )

        assert summary.cleaning_tasks_total == 0
        assert summary.cleaning_completion_rate == 1.0
        assert summary.score == 45.0

    def test_zero_habit_day_gets_no_habit_credit(self, store, today, empty_cleaning, no_water, no_reading):
        """No applicable habits: habit ratio 0, only cleaning credit remains"""
        service = DaySummaryService(store)

        summary = service.update_summary(
            today, HabitSnapshot(), empty_cleaning, no_water, no_reading
        )

        assert summary.habits_total == 0
        assert summary.habit_completion_rate == 0.0
        assert summary.score == 20.0

    def test_uncompleted_daily_habit_lowers_score(self, store, habits, today, empty_cleaning, no_water, no_reading):
        """Same day with one habit left undone scores 25 points less"""
        service = DaySummaryService(store)

        partial = service.compute_fields(
            today, habit_snapshot(habits, today, habits[:1]), empty_cleaning, no_water, no_reading
        )
        full = service.compute_fields(
            today, habit_snapshot(habits, today, habits), empty_cleaning, no_water, no_reading
        )

        assert partial["habits_completed"] == 1
        assert full["habits_completed"] == 2
        assert full["score"] - partial["score"] == 25.0

    def test_only_applicable_habits_count(self, store, habits, today, empty_cleaning, no_water, no_reading):
        """A Tuesday-only habit is not in Monday's denominator"""
        tuesday = HabitTemplate(title="Swim", frequency=SpecificWeekdaysFrequency(weekdays=[3]))
        snapshot = HabitSnapshot(habits=habits + [tuesday], logs=[])

        fields = DaySummaryService.compute_fields(today, snapshot, empty_cleaning, no_water, no_reading)

        assert fields["habits_total"] == 2

    def test_cleaning_rotation_capped(self, store, make_task, now, today, no_water, no_reading):
        tasks = [make_task(title=f"Task {i}") for i in range(5)]
        logs = [CleaningLog(task_id=tasks[0].id, completed_date=now)]
        cleaning = CleaningSnapshot(tasks=tasks, logs=logs, now=now)

        fields = DaySummaryService.compute_fields(today, HabitSnapshot(), cleaning, no_water, no_reading)

        assert fields["cleaning_tasks_total"] == 3
        assert fields["cleaning_tasks_completed"] == 1

    def test_water_capped_in_score(self, store, today, empty_cleaning, no_reading):
        fields = DaySummaryService.compute_fields(
            today, HabitSnapshot(), empty_cleaning, water(today, 150), no_reading
        )

        assert fields["water_ounces"] == 150
        assert fields["score"] == 35.0

    def test_other_days_reading_ignored(self, store, today, yesterday, empty_cleaning, no_water):
        reading = ReadingSnapshot(sessions=[ReadingSession(book_id="b", date=yesterday, pages_read=30)])

        fields = DaySummaryService.compute_fields(today, HabitSnapshot(), empty_cleaning, no_water, reading)

        assert fields["pages_read"] == 0
        assert fields["score"] == 20.0


class TestUpsert:
    """Tests for one-record-per-day upserts"""

    def test_single_record_per_day(self, store, habits, today, empty_cleaning, no_water, no_reading, now):
        service = DaySummaryService(store)

        first = service.update_summary(
            today, habit_snapshot(habits, today, []), empty_cleaning, no_water, no_reading, now=now
        )
        second = service.update_summary(
            today, habit_snapshot(habits, today, habits), empty_cleaning, no_water, no_reading,
            now=now + timedelta(minutes=5)
        )

        assert len(service.summaries) == 1
        assert second.id == first.id
        assert second.habits_completed == 2
        assert second.created_at == now
        assert second.updated_at == now + timedelta(minutes=5)

    def test_datetime_target_is_truncated(self, store, today, empty_cleaning, no_water, no_reading):
        service = DaySummaryService(store)

        service.update_summary(datetime(2026, 1, 5, 8, 0), HabitSnapshot(), empty_cleaning, no_water, no_reading)
        service.update_summary(datetime(2026, 1, 5, 22, 0), HabitSnapshot(), empty_cleaning, no_water, no_reading)

        assert len(service.summaries) == 1
        assert service.summary_for_date(today) is not None

    def test_reflection_survives_recompute(self, store, habits, today, empty_cleaning, no_water, no_reading):
        service = DaySummaryService(store)
        service.update_reflection(today, "Good focus today")

        summary = service.update_summary(
            today, habit_snapshot(habits, today, habits), empty_cleaning, no_water, no_reading
        )

        assert summary.reflection_note == "Good focus today"
        assert summary.score == 70.0

    def test_reflection_does_not_recompute(self, store, habits, today, empty_cleaning, no_water, no_reading):
        service = DaySummaryService(store)
        service.update_summary(today, habit_snapshot(habits, today, habits), empty_cleaning, no_water, no_reading)

        summary = service.update_reflection(today, "Tired")

        assert summary.score == 70.0
        assert len(service.summaries) == 1

    def test_reflection_creates_empty_day(self, store, today):
        service = DaySummaryService(store)

        summary = service.update_reflection(today, "Rest day")

        assert summary.score == 0.0
        assert summary.habits_total == 0

    def test_persisted(self, sql_store, today, empty_cleaning, no_water, no_reading):
        service = DaySummaryService(sql_store)
        service.update_summary(today, HabitSnapshot(), empty_cleaning, no_water, no_reading)

        reloaded = DaySummaryService(sql_store)

        assert sql_store.exists(KEY_DAY_SUMMARIES)
        assert reloaded.summary_for_date(today).score == 20.0

    def test_delete_summary(self, store, today):
        service = DaySummaryService(store)
        service.update_reflection(today, "x")

        assert service.delete_summary(today) is True
        assert service.delete_summary(today) is False
        assert service.summary_for_date(today) is None

"""
Tests for CleaningService and the day rotation.
"""
import pytest
from datetime import datetime, timedelta

from lifetrack.constants import KEY_CLEANING_TASKS
from lifetrack.exceptions import CleaningTaskNotFoundException
from lifetrack.services.cleaning_service import CleaningService, todays_rotation


class TestDefaultTasks:
    """Tests for first-launch seeding"""

    def test_seeds_household_rotation(self, store, now):
        service = CleaningService(store, now=now)

        titles = [task.title for task in service.tasks]
        assert len(titles) == 8
        assert "Floors" in titles
        assert store.exists(KEY_CLEANING_TASKS)

    def test_new_tasks_are_due_immediately(self, store, now):
        """Seeded tasks are due at creation, so today's list is full"""
        service = CleaningService(store, now=now)

        assert len(service.tasks_for_today(now + timedelta(minutes=1))) == 3
        assert len(service.overdue_tasks(now + timedelta(minutes=1))) == 8


class TestTaskLifecycle:
    """Tests for completing, snoozing and archiving tasks"""

    def test_complete_task(self, store, make_task, now, today):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task(title="Floors"))

        log = service.complete_task(task.id, now=now, duration_minutes=25)

        updated = service.get_task(task.id)
        assert log.task_id == task.id
        assert log.duration_minutes == 25
        assert updated.last_completed_date == now
        assert service.is_task_completed(task.id, today) is True
        assert service.tasks_for_today(now) == []

    def test_completion_clears_snooze(self, store, make_task, now):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task(snoozed_until=now + timedelta(days=2)))

        service.complete_task(task.id, now=now)

        assert service.get_task(task.id).snoozed_until is None

    def test_snooze_one_day(self, store, make_task, now):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task())

        service.snooze_task_for_one_day(task.id, now=now)

        assert service.tasks_for_today(now) == []
        assert service.overdue_tasks(now) == []
        assert service.due_today_tasks(now) == []

        service.clear_snooze(task.id)
        assert len(service.tasks_for_today(now)) == 1

    def test_archive_and_restore(self, store, make_task, now):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task())

        service.archive_task(task.id)
        assert service.archived_tasks[0].id == task.id
        assert service.tasks_for_today(now) == []

        service.restore_task(task.id)
        assert service.active_tasks[0].id == task.id

    def test_lifecycle_changes_touch_updated_at(self, store, make_task, now):
        service = CleaningService(store, seed_defaults=False)
        stale = datetime(2020, 1, 1)
        task = service.add_task(make_task(snoozed_until=now + timedelta(days=1)).model_copy(
            update={"updated_at": stale}
        ))

        archived = service.archive_task(task.id)
        assert archived.updated_at > stale

        service.tasks = [t.model_copy(update={"updated_at": stale}) for t in service.tasks]
        assert service.restore_task(task.id).updated_at > stale

        service.tasks = [t.model_copy(update={"updated_at": stale}) for t in service.tasks]
        assert service.clear_snooze(task.id).updated_at > stale

    def test_delete_keeps_history(self, store, make_task, now):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task())
        service.complete_task(task.id, now=now)

        service.delete_task(task.id)

        assert service.tasks == []
        assert len(service.logs_for_task(task.id)) == 1

    def test_unknown_task(self, store, now):
        service = CleaningService(store, seed_defaults=False)

        with pytest.raises(CleaningTaskNotFoundException):
            service.complete_task("missing", now=now)

    def test_changes_persist(self, store, make_task, now, today):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task())
        service.complete_task(task.id, now=now)

        reloaded = CleaningService(store, seed_defaults=False)

        assert reloaded.get_task(task.id).last_completed_date == now
        assert reloaded.is_task_completed(task.id, today) is True


class TestStatistics:
    """Tests for counts and completion rate"""

    def test_completed_count_includes_repeats(self, store, make_task, now, today):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task(kind="daily"))
        service.complete_task(task.id, now=now)
        service.complete_task(task.id, now=now + timedelta(hours=1))

        assert service.completed_tasks_count(today) == 2
        assert len(service.logs_for_task(task.id)) == 2

    def test_completion_rate_counts_finished_tasks(self, store, make_task, now, today):
        """A completed task stays in the day's rotation"""
        service = CleaningService(store, seed_defaults=False)
        first = service.add_task(make_task(title="First"))
        service.add_task(make_task(title="Second"))

        service.complete_task(first.id, now=now)

        assert service.completion_rate(today, now) == 0.5

    def test_completion_rate_without_tasks(self, store, now, today):
        """Nothing due means full credit"""
        service = CleaningService(store, seed_defaults=False)

        assert service.completion_rate(today, now) == 1.0


class TestTodaysRotation:
    """Tests for todays_rotation"""

    def test_completed_first_then_pending_capped(self, store, make_task, now, today):
        service = CleaningService(store, seed_defaults=False)
        tasks = [service.add_task(make_task(title=f"Task {i}")) for i in range(5)]
        service.complete_task(tasks[4].id, now=now)

        rotation = todays_rotation(service.tasks, service.logs, today, now)

        assert len(rotation) == 3
        assert rotation[0].id == tasks[4].id

    def test_other_days_completion_not_counted(self, store, make_task, now, today):
        service = CleaningService(store, seed_defaults=False)
        task = service.add_task(make_task(kind="daily"))
        service.complete_task(task.id, now=now - timedelta(days=2))

        rotation = todays_rotation(service.tasks, service.logs, today, now)

        assert [t.id for t in rotation] == [task.id]
        assert service.is_task_completed(task.id, today) is False

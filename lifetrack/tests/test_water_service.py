"""
Tests for WaterService.
"""
import pytest
from datetime import timedelta

from lifetrack.exceptions import ValidationException
from lifetrack.repositories.profile_repository import ProfileRepository
from lifetrack.services.water_service import WaterService


class TestAddWater:
    """Tests for adding and removing entries"""

    def test_entries_accumulate(self, store, today):
        service = WaterService(store)

        service.add_water(16, today)
        log = service.add_water(24, today)

        assert len(log.entries) == 2
        assert service.total_ounces(today) == 40
        assert service.remaining(today) == 60
        assert len(service.logs) == 1

    def test_rejects_non_positive(self, store, today):
        service = WaterService(store)

        with pytest.raises(ValidationException):
            service.add_water(0, today)

    def test_quick_add(self, store, today):
        service = WaterService(store)

        service.quick_add(4, today)

        assert service.total_ounces(today) == 32

    def test_remove_last_entry(self, store, today):
        service = WaterService(store)
        service.add_water(8, today)
        service.add_water(12, today)

        removed = service.remove_last_entry(today)

        assert removed.amount == 12
        assert service.total_ounces(today) == 8
        assert service.remove_last_entry(today - timedelta(days=1)) is None

    def test_set_manual_total(self, store, today):
        service = WaterService(store)
        service.add_water(8, today)
        service.add_water(12, today)

        log = service.set_manual_total(90, today)

        assert len(log.entries) == 1
        assert service.total_ounces(today) == 90


class TestProgress:
    """Tests for progress and averages"""

    def test_progress_capped(self, store, today):
        service = WaterService(store)
        service.add_water(150, today)

        assert service.progress(today) == 1.0
        assert service.is_complete(today) is True
        assert service.remaining(today) == 0

    def test_empty_day(self, store, today):
        service = WaterService(store)

        assert service.total_ounces(today) == 0
        assert service.progress(today) == 0
        assert service.is_complete(today) is False

    def test_weekly_average_over_logged_days(self, store, today):
        service = WaterService(store)
        service.add_water(100, today)
        service.add_water(50, today - timedelta(days=2))
        service.add_water(500, today - timedelta(days=7))

        assert service.weekly_average(today) == 75

    def test_weekly_data(self, store, today):
        service = WaterService(store)
        service.add_water(20, today)

        data = service.weekly_data(today)

        assert len(data) == 7
        assert data[0] == (today - timedelta(days=6), 0)
        assert data[-1] == (today, 20)


class TestTarget:
    """Tests for the daily target"""

    def test_target_from_profile(self, store):
        profile = ProfileRepository.get(store)
        profile.daily_water_target = 80
        ProfileRepository.update(store, profile)

        assert WaterService(store).daily_target == 80

    def test_update_daily_target(self, store, today):
        service = WaterService(store)
        service.add_water(40, today)

        service.update_daily_target(120, today)

        assert service.water_log(today).target_ounces == 120
        assert ProfileRepository.get(store).daily_water_target == 120
        assert service.snapshot(today).target == 120

"""
Water intake service.
One WaterLog per calendar day, made of individual entries.
"""
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from lifetrack.constants import KEY_WATER_LOGS, WATER_QUICK_ADD_OUNCES
from lifetrack.exceptions import ValidationException
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.repositories.profile_repository import ProfileRepository
from lifetrack.schemas import WaterEntry, WaterLog, WaterSnapshot
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.water")


class WaterService:
    """Service for daily water logs"""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.repo = CollectionRepository(store, KEY_WATER_LOGS, WaterLog)
        self.daily_target = ProfileRepository.get(store).daily_water_target
        self.logs: List[WaterLog] = []
        self.load_data()

    def load_data(self) -> None:
        self.logs = self.repo.load_all()

    def water_log(self, on: date) -> Optional[WaterLog]:
        for log in self.logs:
            if log.date == on:
                return log
        return None

    def add_water(self, amount: float, on: Optional[date] = None) -> WaterLog:
        """
        Add an entry to a day's log, creating the log if needed.

        Raises:
            ValidationException: If amount is not positive
        """
        if amount <= 0:
            raise ValidationException("amount", "Water amount must be positive")
        on = on or date.today()

        with self.repo.lock:
            log = self.water_log(on)
            if log is None:
                log = WaterLog(date=on, target_ounces=self.daily_target)
                self.logs.append(log)
            log.entries.append(WaterEntry(amount=amount))
            self.repo.save_all(self.logs)
        return log

    def quick_add(self, index: int, on: Optional[date] = None) -> WaterLog:
        """Add one of the preset serving sizes (8, 12, 16, 24, 32 oz)"""
        if not 0 <= index < len(WATER_QUICK_ADD_OUNCES):
            raise ValidationException("index", f"Quick-add index must be 0-{len(WATER_QUICK_ADD_OUNCES) - 1}")
        return self.add_water(WATER_QUICK_ADD_OUNCES[index], on)

    def remove_last_entry(self, on: Optional[date] = None) -> Optional[WaterEntry]:
        on = on or date.today()
        with self.repo.lock:
            log = self.water_log(on)
            if log is None or not log.entries:
                return None
            entry = log.entries.pop()
            self.repo.save_all(self.logs)
        return entry

    def set_manual_total(self, amount: float, on: Optional[date] = None) -> WaterLog:
        """Replace all of a day's entries with a single entry"""
        if amount <= 0:
            raise ValidationException("amount", "Water amount must be positive")
        on = on or date.today()

        with self.repo.lock:
            log = self.water_log(on)
            if log is None:
                log = WaterLog(date=on, target_ounces=self.daily_target)
                self.logs.append(log)
            log.entries = [WaterEntry(amount=amount)]
            self.repo.save_all(self.logs)
        return log

    # Queries

    def total_ounces(self, on: date) -> float:
        log = self.water_log(on)
        return log.total_ounces if log else 0.0

    def progress(self, on: date) -> float:
        log = self.water_log(on)
        return log.progress if log else 0.0

    def is_complete(self, on: date) -> bool:
        log = self.water_log(on)
        return log.is_complete if log else False

    def remaining(self, on: date) -> float:
        log = self.water_log(on)
        return log.remaining_ounces if log else self.daily_target

    def weekly_average(self, today: Optional[date] = None) -> float:
        """Average over the last 7 days that have a log"""
        today = today or date.today()
        totals = [
            log.total_ounces for log in (
                self.water_log(today - timedelta(days=offset)) for offset in range(7)
            )
            if log is not None
        ]
        if not totals:
            return 0.0
        return sum(totals) / len(totals)

    def weekly_data(self, today: Optional[date] = None) -> List[Tuple[date, float]]:
        """(day, ounces) for the last 7 days, oldest first"""
        today = today or date.today()
        days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
        return [(day, self.total_ounces(day)) for day in days]

    def update_daily_target(self, target: float, today: Optional[date] = None) -> None:
        """Change the target on the profile and on today's log"""
        if target <= 0:
            raise ValidationException("daily_water_target", "Target must be positive")
        today = today or date.today()
        self.daily_target = target

        profile = ProfileRepository.get(self.store)
        profile.daily_water_target = target
        ProfileRepository.update(self.store, profile)

        with self.repo.lock:
            log = self.water_log(today)
            if log is not None:
                log.target_ounces = target
                self.repo.save_all(self.logs)
        logger.info(f"Daily water target set to {target} oz")

    def snapshot(self, on: date) -> WaterSnapshot:
        return WaterSnapshot(log=self.water_log(on), target=self.daily_target)

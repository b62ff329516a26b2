"""
History rollups over stored day summaries.
Weekly and monthly views, recent averages and good-day streaks.
"""
from datetime import date, timedelta
from typing import Dict, List, Optional

from lifetrack.constants import (
    DEFAULT_AVERAGE_SCORE_DAYS,
    DEFAULT_FIRST_WEEKDAY,
    DEFAULT_RECENT_SUMMARY_COUNT,
    GOOD_DAY_SCORE_THRESHOLD,
    KEY_DAY_SUMMARIES,
)
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import DaySummary, MonthlySummary, WeeklySummary
from lifetrack.services.date_service import DateService
from lifetrack.storage import DocumentStore


class HistoryService:
    """
    Read-only queries over the day summary collection.

    Summaries are re-read from the store for every query so results always
    reflect the aggregator's latest writes.
    """

    def __init__(self, store: DocumentStore, first_weekday: int = DEFAULT_FIRST_WEEKDAY):
        self.repo = CollectionRepository(store, KEY_DAY_SUMMARIES, DaySummary)
        self.first_weekday = first_weekday

    def _by_date(self) -> Dict[date, DaySummary]:
        return {summary.date: summary for summary in self.repo.load_all()}

    def summary_for_date(self, target_date: date) -> Optional[DaySummary]:
        return self._by_date().get(DateService.to_date(target_date))

    def summaries_between(self, start: date, end: date) -> List[DaySummary]:
        """Summaries with start <= date <= end, oldest first"""
        summaries = [s for s in self._by_date().values() if start <= s.date <= end]
        return sorted(summaries, key=lambda s: s.date)

    # Weeks and months

    def summaries_for_week(self, containing: date) -> List[DaySummary]:
        week_start, week_end = DateService.week_range(
            DateService.to_date(containing), self.first_weekday
        )
        return self.summaries_between(week_start, week_end)

    def weekly_summary(self, containing: date) -> WeeklySummary:
        """
        Roll up the 7-day week containing a date.

        The week starts on the configured first weekday; days without a
        summary are simply absent from the rollup.
        """
        week_start, week_end = DateService.week_range(
            DateService.to_date(containing), self.first_weekday
        )
        return WeeklySummary(
            start_date=week_start,
            end_date=week_end,
            days=self.summaries_between(week_start, week_end)
        )

    def summaries_for_month(self, year: int, month: int) -> List[DaySummary]:
        month_start, month_end = DateService.month_range(year, month)
        return self.summaries_between(month_start, month_end)

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        month_start, month_end = DateService.month_range(year, month)
        return MonthlySummary(
            start_date=month_start,
            end_date=month_end,
            days=self.summaries_between(month_start, month_end)
        )

    # Recent activity

    def recent_summaries(self, count: int = DEFAULT_RECENT_SUMMARY_COUNT) -> List[DaySummary]:
        """The most recent stored summaries, newest first"""
        summaries = sorted(self._by_date().values(), key=lambda s: s.date, reverse=True)
        return summaries[:count]

    def average_score(self, last_days: int = DEFAULT_AVERAGE_SCORE_DAYS) -> float:
        """Mean score of the last_days most recent summaries (0 with none)"""
        recent = self.recent_summaries(last_days)
        if not recent:
            return 0.0
        return sum(s.score for s in recent) / len(recent)

    # Streaks

    def current_streak(self, today: Optional[date] = None) -> int:
        """
        Consecutive good days (score >= 50) walking backward from today.

        A day without a summary ends the streak, so a today that has not
        been summarized yet gives 0.
        """
        today = DateService.to_date(today or date.today())
        by_date = self._by_date()

        streak = 0
        current = today
        while current in by_date and by_date[current].score >= GOOD_DAY_SCORE_THRESHOLD:
            streak += 1
            current = current - timedelta(days=1)
        return streak

    def best_streak(self) -> int:
        """
        Longest run of good days over all history.

        A good day continues the run only when it directly follows the
        previous summary; after a gap it starts a new run of 1. A day
        below the threshold resets the run to 0.
        """
        best = 0
        running = 0
        last_date: Optional[date] = None

        for summary in sorted(self._by_date().values(), key=lambda s: s.date):
            if summary.score >= GOOD_DAY_SCORE_THRESHOLD:
                if last_date is not None and DateService.days_between(last_date, summary.date) == 1:
                    running += 1
                else:
                    running = 1
                best = max(best, running)
            else:
                running = 0
            last_date = summary.date

        return best

"""
Markdown exports for weekly and daily reviews.
Pure formatting over already-derived data.
"""
from datetime import date
from typing import List, Optional, Tuple

from lifetrack.schemas import (
    Book,
    CleaningTask,
    DaySummary,
    Goal,
    HabitLog,
    HabitTemplate,
    WeeklySummary,
)

CHECK = "✓"
CROSS = "✗"
OPEN = "○"


def format_date(value: date) -> str:
    """Medium date style, e.g. "Jan 5, 2026"."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


class ExportService:
    """Service for text reports"""

    @staticmethod
    def weekly_review(
        goals: List[Goal],
        weekly_summary: WeeklySummary,
        current_books: List[Book],
        reflection_notes: List[str]
    ) -> str:
        """
        Build the weekly review report.

        Sections: period, high-level goals, KPIs with progress, weekly
        performance, books in progress, a daily breakdown table, non-empty
        reflections and closing review questions.

        Args:
            goals: All goals (vision goals and KPIs)
            weekly_summary: Rollup of the week
            current_books: Books currently being read
            reflection_notes: Reflection notes of the week

        Returns:
            Markdown text
        """
        week = weekly_summary
        lines = [
            "# Weekly Review",
            "",
            "## Period",
            f"{format_date(week.start_date)} - {format_date(week.end_date)}",
            "",
            "---",
            "",
            "## High-Level Goals",
        ]
        lines += [f"- {goal.title}" for goal in goals if goal.is_high_level]

        lines += ["", "## KPIs"]
        for kpi in (goal for goal in goals if not goal.is_high_level):
            line = f"- {kpi.title}"
            if kpi.current_value is not None and kpi.target_value and kpi.unit:
                percent = int(kpi.current_value / kpi.target_value * 100)
                line += f": {int(kpi.current_value)}/{int(kpi.target_value)} {kpi.unit} ({percent}%)"
            lines.append(line)

        lines += [
            "",
            "---",
            "",
            "## Weekly Performance",
            "",
            "### Overall",
            f"- **Average Daily Score:** {week.average_score:.1f}%",
            f"- **Days Tracked:** {len(week.days)}/7",
            "",
            "### Habits",
            f"- **Completion Rate:** {week.habit_compliance_rate * 100:.1f}%",
            f"- **Habits Completed:** {week.total_habits_completed}/{week.total_habits_total}",
            "",
            "### Cleaning",
            f"- **Completion Rate:** {week.cleaning_compliance_rate * 100:.1f}%",
            "",
            "### Hydration",
            f"- **Daily Average:** {week.average_water_ounces:.0f}oz",
            "",
            "### Reading",
            f"- **Days Read:** {week.days_with_reading}/7",
            f"- **Pages Read:** {week.total_pages_read}",
        ]

        if current_books:
            lines += ["", "### Currently Reading"]
            for book in current_books:
                lines.append(
                    f"- **{book.title}** by {book.author} - {book.progress_percentage}% complete "
                    f"({book.current_page}/{book.total_pages} pages)"
                )

        lines += [
            "",
            "---",
            "",
            "## Daily Breakdown",
            "",
            "| Day | Score | Habits | Cleaning | Water | Read |",
            "|-----|-------|--------|----------|-------|------|",
        ]
        for day in week.days:
            lines.append(
                f"| {day.day_of_week[:3]} | {day.score:.0f}% "
                f"| {day.habits_completed}/{day.habits_total} "
                f"| {day.cleaning_tasks_completed}/{day.cleaning_tasks_total} "
                f"| {int(day.water_ounces)}oz | {CHECK if day.did_read else CROSS} |"
            )

        notes = [note for note in reflection_notes if note]
        if notes:
            lines += ["", "---", "", "## Reflections"]
            for note in notes:
                lines += ["", f"> {note}"]

        lines += [
            "",
            "---",
            "",
            "## Questions for Review",
            "",
            "1. What patterns show up in this week's performance?",
            "2. Which areas need the most attention?",
            "3. What should change next week?",
            "4. Are the annual KPIs on track?",
            "",
        ]
        return "\n".join(lines)

    @staticmethod
    def daily_export(
        summary: DaySummary,
        habits: List[Tuple[HabitTemplate, Optional[HabitLog]]],
        cleaning_tasks: List[Tuple[CleaningTask, bool]],
        current_book: Optional[Book] = None
    ) -> str:
        """Build the daily summary report"""
        lines = [
            f"# Daily Summary - {format_date(summary.date)}",
            "",
            f"## Score: {summary.score:.0f}%",
            "",
            "---",
            "",
            f"## Habits ({summary.habits_completed}/{summary.habits_total})",
            "",
        ]
        for habit, log in habits:
            status = CHECK if log is not None and log.completed else OPEN
            line = f"{status} {habit.title}"
            if log is not None and log.numeric_value is not None and habit.unit:
                line += f" - {int(log.numeric_value)}{habit.unit}"
            if log is not None and log.duration_minutes is not None:
                line += f" - {log.duration_minutes} min"
            lines.append(line)

        lines += [
            "",
            f"## Cleaning ({summary.cleaning_tasks_completed}/{summary.cleaning_tasks_total})",
            "",
        ]
        lines += [f"{CHECK if done else OPEN} {task.title}" for task, done in cleaning_tasks]

        lines += [
            "",
            f"## Water: {int(summary.water_ounces)}/{int(summary.water_target)}oz "
            f"({summary.water_completion_rate * 100:.0f}%)",
            "",
            "## Reading",
            f"- Pages Read: {summary.pages_read}",
        ]
        if current_book is not None:
            lines.append(f"- Currently Reading: {current_book.title} ({current_book.progress_percentage}%)")

        if summary.reflection_note:
            lines += ["", "## Reflection", summary.reflection_note]

        return "\n".join(lines)

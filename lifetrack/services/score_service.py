"""
Daily score calculation.
Combines four completion ratios with fixed weights into a 0-100 score.
"""
from lifetrack.constants import (
    MAX_SCORE,
    SCORE_WEIGHT_HABITS,
    SCORE_WEIGHT_CLEANING,
    SCORE_WEIGHT_WATER,
    SCORE_WEIGHT_READING,
)


def habit_completion_ratio(completed: int, total: int) -> float:
    """
    Completed / applicable habits.

    A day with no applicable habits earns no credit (0.0), unlike
    cleaning_completion_ratio.
    """
    if total <= 0:
        return 0.0
    return completed / total


def cleaning_completion_ratio(completed: int, total: int) -> float:
    """Completed / selected cleaning tasks; no tasks due means full credit."""
    if total <= 0:
        return 1.0
    return completed / total


def water_completion_ratio(ounces: float, target: float) -> float:
    """Water progress against target, capped at 1.0."""
    if target <= 0:
        return 0.0
    return min(ounces / target, 1.0)


def calculate_score(
    habit_ratio: float,
    cleaning_ratio: float,
    water_ratio: float,
    did_read: bool
) -> float:
    """
    Calculate the daily score.

    Formula: 100 * (habits*0.50 + cleaning*0.20 + water*0.15 + reading*0.15)

    Reading is boolean: any reading at all earns the full reading weight.

    Args:
        habit_ratio: Habit completion ratio (0-1)
        cleaning_ratio: Cleaning completion ratio (0-1)
        water_ratio: Water completion ratio (0-1, capped upstream)
        did_read: Whether any reading was logged

    Returns:
        Score between 0 and 100
    """
    reading_score = 1.0 if did_read else 0.0

    score = (
        habit_ratio * SCORE_WEIGHT_HABITS
        + cleaning_ratio * SCORE_WEIGHT_CLEANING
        + min(water_ratio, 1.0) * SCORE_WEIGHT_WATER
        + reading_score * SCORE_WEIGHT_READING
    )

    return max(0.0, min(score, MAX_SCORE))

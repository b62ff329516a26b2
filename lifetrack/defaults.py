"""
Seed data used when a collection has never been stored.
"""
from datetime import datetime
from typing import List

from lifetrack.schemas import (
    CleaningTask,
    CustomFrequency,
    FixedRecurrence,
    Goal,
    GoalCategory,
    HabitCategory,
    HabitInputType,
    HabitTemplate,
    MobilityExercise,
    MobilityRoutine,
    WeeklyCountFrequency,
)


def default_cleaning_tasks(now: datetime) -> List[CleaningTask]:
    """Household rotation; every task starts out due immediately."""
    specs = [
        ("Kitchen reset", "daily", 15),
        ("Floors", "weekly", 30),
        ("Bathrooms", "weekly", 20),
        ("Laundry", "weekly", 60),
        ("Fridge clean-out", "weekly", 15),
        ("Bedding", "biweekly", 30),
        ("Car clean", "monthly", 45),
        ("Garage/Gear tidy", "monthly", 60),
    ]
    return [
        CleaningTask(
            title=title,
            recurrence=FixedRecurrence(kind=kind),
            estimated_minutes=minutes,
            created_at=now,
            updated_at=now,
        )
        for title, kind, minutes in specs
    ]


def default_core_habits(now: datetime) -> List[HabitTemplate]:
    """Core habits are seeded on first launch and can only be deactivated."""

    def core(title, category, **kwargs) -> HabitTemplate:
        return HabitTemplate(
            title=title,
            category=category,
            is_core=True,
            created_at=now,
            updated_at=now,
            **kwargs
        )

    six_per_week = WeeklyCountFrequency(days_per_week=6)

    return [
        # Life
        core("Brick phone 5-8pm", HabitCategory.LIFE),
        core("Read a chapter a day", HabitCategory.LIFE),
        # Fitness
        core("Workout", HabitCategory.FITNESS, frequency=six_per_week),
        core("Mobility", HabitCategory.FITNESS, frequency=six_per_week),
        # Nutrition
        core("Drink 100oz of water", HabitCategory.NUTRITION,
             input_type=HabitInputType.NUMERIC, target_value=100, unit="oz"),
        core("Minimize processed foods", HabitCategory.NUTRITION),
        core("No liquid calories", HabitCategory.NUTRITION),
        core("Only 2 cups of coffee", HabitCategory.NUTRITION,
             input_type=HabitInputType.NUMERIC, target_value=2, unit="cups"),
        core("Hit 145g of protein", HabitCategory.NUTRITION,
             input_type=HabitInputType.NUMERIC, target_value=145, unit="g"),
        # Health
        core("Lights out by 10pm", HabitCategory.HEALTH),
        core("Track HRV daily", HabitCategory.HEALTH),
        core("Meditate daily", HabitCategory.HEALTH, input_type=HabitInputType.DURATION),
        # Work
        core("Work 9-5:30", HabitCategory.WORK),
        core("Limit social media to 15 min", HabitCategory.WORK,
             input_type=HabitInputType.DURATION, target_value=15, unit="min"),
        # Supplements & recovery
        core("Wake up 5:30am", HabitCategory.SUPPLEMENTS),
        core("Multivitamin", HabitCategory.SUPPLEMENTS),
        core("Recovery vitamin", HabitCategory.SUPPLEMENTS),
        core("Anti-sickness vitamin", HabitCategory.SUPPLEMENTS),
        core("10 min in hot tub", HabitCategory.SUPPLEMENTS,
             input_type=HabitInputType.DURATION, target_value=10, unit="min"),
        core("Daily mobility", HabitCategory.SUPPLEMENTS,
             frequency=CustomFrequency(description="After every ride")),
    ]


def default_goals() -> List[Goal]:
    return [
        Goal(title="Be more present and enjoy the time I have", category=GoalCategory.PRESENCE),
        Goal(title="Live a healthy life", category=GoalCategory.HEALTH),
        Goal(title="Enjoy the outdoors more", category=GoalCategory.OUTDOORS),
        Goal(title="Reach 250 FTP", category=GoalCategory.FITNESS, is_high_level=False,
             target_value=250, current_value=0, unit="FTP"),
        Goal(title="Ski 50 days", category=GoalCategory.OUTDOORS, is_high_level=False,
             target_value=50, current_value=0, unit="days"),
        Goal(title="Phone under 1 hour/day", category=GoalCategory.PHONE, is_high_level=False,
             target_value=60, current_value=0, unit="min/day avg"),
    ]


BIKE_MOBILITY_ROUTINE = MobilityRoutine(
    title="Bike-Mobility & Knee Health Routine",
    exercises=[
        MobilityExercise(
            name="Cat-Cow + Thoracic Reach",
            why="Mobilizes the spine for a better aero position and breathing.",
            duration_seconds=90,
            reps_or_hold_description="6 cycles + 3 reps per side",
        ),
        MobilityExercise(
            name="Hip Flexor / Psoas Lunge Stretch",
            why="Releases tight hip flexors so the pelvis can rotate forward.",
            duration_seconds=60,
            reps_or_hold_description="30 sec each side",
        ),
        MobilityExercise(
            name="Hamstring Glide",
            why="Active hamstring mobility without passive overstretching.",
            duration_seconds=60,
            reps_or_hold_description="8 glides each side",
        ),
        MobilityExercise(
            name="Glute Bridge",
            why="Wakes up the glutes to take load off the knees.",
            duration_seconds=60,
            reps_or_hold_description="2 x 10",
        ),
    ],
)

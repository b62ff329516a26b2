from pydantic import BaseModel, Field
from datetime import datetime, date
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union
from uuid import uuid4

from lifetrack.constants import (
    DEFAULT_FIRST_WEEKDAY,
    DEFAULT_PROTEIN_TARGET_GRAMS,
    DEFAULT_WATER_TARGET_OUNCES,
)
from lifetrack.services.score_service import (
    cleaning_completion_ratio,
    habit_completion_ratio,
    water_completion_ratio,
)


def new_id() -> str:
    return str(uuid4())


def format_minutes(total_minutes: int) -> str:
    """Format minutes as "1h 30m", "2h" or "45m"."""
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h"
    return f"{minutes}m"


# Recurrence rules (cleaning tasks)
class FixedRecurrence(BaseModel):
    kind: Literal["daily", "weekly", "biweekly", "monthly"] = "daily"


class CustomRecurrence(BaseModel):
    kind: Literal["custom"] = "custom"
    days: int = Field(..., ge=1, le=365)


RecurrenceRule = Annotated[
    Union[FixedRecurrence, CustomRecurrence], Field(discriminator="kind")
]


class CleaningTask(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1, max_length=200)
    recurrence: RecurrenceRule
    estimated_minutes: Optional[int] = Field(None, ge=0)
    is_active: bool = True
    last_completed_date: Optional[datetime] = None
    snoozed_until: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CleaningLog(BaseModel):
    id: str = Field(default_factory=new_id)
    task_id: str
    completed_date: datetime = Field(default_factory=datetime.now)
    duration_minutes: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None


# Habit frequency rules
class DailyFrequency(BaseModel):
    kind: Literal["daily"] = "daily"


class WeeklyCountFrequency(BaseModel):
    kind: Literal["weekly_count"] = "weekly_count"
    days_per_week: int = Field(..., ge=1, le=7)


class SpecificWeekdaysFrequency(BaseModel):
    kind: Literal["specific_weekdays"] = "specific_weekdays"
    weekdays: List[Annotated[int, Field(ge=1, le=7)]]  # 1 = Sunday ... 7 = Saturday


class CustomFrequency(BaseModel):
    kind: Literal["custom"] = "custom"
    description: str = ""


FrequencyRule = Annotated[
    Union[DailyFrequency, WeeklyCountFrequency, SpecificWeekdaysFrequency, CustomFrequency],
    Field(discriminator="kind"),
]


class HabitCategory(str, Enum):
    LIFE = "life"
    FITNESS = "fitness"
    NUTRITION = "nutrition"
    HEALTH = "health"
    WORK = "work"
    SUPPLEMENTS = "supplements"
    CUSTOM = "custom"


class HabitInputType(str, Enum):
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    DURATION = "duration"
    NOTE = "note"


class HabitTemplate(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1, max_length=200)
    category: HabitCategory = HabitCategory.CUSTOM
    frequency: FrequencyRule = Field(default_factory=DailyFrequency)
    input_type: HabitInputType = HabitInputType.BOOLEAN
    target_value: Optional[float] = None  # For numeric/duration habits
    unit: Optional[str] = None  # oz, g, min, cups
    is_core: bool = False  # Core habits can be deactivated, never deleted
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class HabitLog(BaseModel):
    id: str = Field(default_factory=new_id)
    habit_id: str
    date: date
    completed: bool = False
    numeric_value: Optional[float] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)


# Water
class WaterEntry(BaseModel):
    id: str = Field(default_factory=new_id)
    amount: float = Field(..., gt=0)  # ounces
    timestamp: datetime = Field(default_factory=datetime.now)


class WaterLog(BaseModel):
    id: str = Field(default_factory=new_id)
    date: date
    entries: List[WaterEntry] = Field(default_factory=list)
    target_ounces: float = Field(default=DEFAULT_WATER_TARGET_OUNCES, ge=0)

    @property
    def total_ounces(self) -> float:
        return sum(entry.amount for entry in self.entries)

    @property
    def progress(self) -> float:
        return water_completion_ratio(self.total_ounces, self.target_ounces)

    @property
    def is_complete(self) -> bool:
        return self.total_ounces >= self.target_ounces

    @property
    def remaining_ounces(self) -> float:
        return max(self.target_ounces - self.total_ounces, 0.0)


# Reading
class BookStatus(str, Enum):
    WANT_TO_READ = "want_to_read"
    CURRENTLY_READING = "currently_reading"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class Book(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1, max_length=500)
    author: str = ""
    total_pages: int = Field(..., gt=0)
    current_page: int = Field(default=0, ge=0)
    status: BookStatus = BookStatus.WANT_TO_READ
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def progress(self) -> float:
        return min(self.current_page / self.total_pages, 1.0)

    @property
    def progress_percentage(self) -> int:
        return int(self.progress * 100)

    @property
    def pages_remaining(self) -> int:
        return max(self.total_pages - self.current_page, 0)

    @property
    def is_complete(self) -> bool:
        return self.current_page >= self.total_pages


class ReadingSession(BaseModel):
    id: str = Field(default_factory=new_id)
    book_id: str
    date: date
    pages_read: int = Field(..., ge=0)
    duration_minutes: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None
    start_page: int = Field(default=0, ge=0)
    end_page: int = Field(default=0, ge=0)


# Day summaries
class DaySummary(BaseModel):
    id: str = Field(default_factory=new_id)
    date: date

    habits_completed: int = 0
    habits_total: int = 0

    cleaning_tasks_completed: int = 0
    cleaning_tasks_total: int = 0

    water_ounces: float = 0.0
    water_target: float = DEFAULT_WATER_TARGET_OUNCES

    pages_read: int = 0
    minutes_read: int = 0

    score: float = 0.0
    reflection_note: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def habit_completion_rate(self) -> float:
        return habit_completion_ratio(self.habits_completed, self.habits_total)

    @property
    def cleaning_completion_rate(self) -> float:
        return cleaning_completion_ratio(
            self.cleaning_tasks_completed, self.cleaning_tasks_total
        )

    @property
    def water_completion_rate(self) -> float:
        return water_completion_ratio(self.water_ounces, self.water_target)

    @property
    def did_read(self) -> bool:
        return self.pages_read > 0

    @property
    def day_of_week(self) -> str:
        return self.date.strftime("%A")


class PeriodSummary(BaseModel):
    """Aggregate view over a contiguous range of day summaries (not persisted)."""
    start_date: date
    end_date: date
    days: List[DaySummary] = Field(default_factory=list)

    @property
    def average_score(self) -> float:
        if not self.days:
            return 0.0
        return sum(day.score for day in self.days) / len(self.days)

    @property
    def total_habits_completed(self) -> int:
        return sum(day.habits_completed for day in self.days)

    @property
    def total_habits_total(self) -> int:
        return sum(day.habits_total for day in self.days)

    @property
    def habit_compliance_rate(self) -> float:
        return habit_completion_ratio(
            self.total_habits_completed, self.total_habits_total
        )

    @property
    def cleaning_compliance_rate(self) -> float:
        completed = sum(day.cleaning_tasks_completed for day in self.days)
        total = sum(day.cleaning_tasks_total for day in self.days)
        return cleaning_completion_ratio(completed, total)

    @property
    def average_water_ounces(self) -> float:
        if not self.days:
            return 0.0
        return sum(day.water_ounces for day in self.days) / len(self.days)

    @property
    def days_with_reading(self) -> int:
        return sum(1 for day in self.days if day.did_read)

    @property
    def total_pages_read(self) -> int:
        return sum(day.pages_read for day in self.days)


class WeeklySummary(PeriodSummary):
    pass


class MonthlySummary(PeriodSummary):
    pass


# Aggregator inputs
class HabitSnapshot(BaseModel):
    habits: List[HabitTemplate] = Field(default_factory=list)  # Active habits
    logs: List[HabitLog] = Field(default_factory=list)


class CleaningSnapshot(BaseModel):
    tasks: List[CleaningTask] = Field(default_factory=list)
    logs: List[CleaningLog] = Field(default_factory=list)
    now: datetime


class WaterSnapshot(BaseModel):
    log: Optional[WaterLog] = None
    target: float = DEFAULT_WATER_TARGET_OUNCES


class ReadingSnapshot(BaseModel):
    sessions: List[ReadingSession] = Field(default_factory=list)


# Workouts
class WorkoutType(str, Enum):
    CYCLING = "cycling"
    RUNNING = "running"
    STRENGTH = "strength"
    YOGA = "yoga"
    SWIMMING = "swimming"
    HIKING = "hiking"
    SKIING = "skiing"
    OTHER = "other"


class WorkoutIntensity(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    VERY_HARD = "very_hard"

    @property
    def tss_multiplier(self) -> float:
        return {
            WorkoutIntensity.EASY: 0.5,
            WorkoutIntensity.MODERATE: 0.7,
            WorkoutIntensity.HARD: 0.9,
            WorkoutIntensity.VERY_HARD: 1.1,
        }[self]


class Workout(BaseModel):
    id: str = Field(default_factory=new_id)
    type: WorkoutType
    title: str = Field(..., min_length=1, max_length=200)
    date: date
    duration_minutes: int = Field(..., ge=0)
    intensity: WorkoutIntensity = WorkoutIntensity.MODERATE
    notes: Optional[str] = None

    # Cycling metrics
    tss: Optional[int] = Field(None, ge=0)
    average_power: Optional[int] = None
    normalized_power: Optional[int] = None
    calories_burned: Optional[int] = None

    # External source tracking (e.g. calendar event id)
    source: Optional[str] = None
    external_id: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def estimated_tss(self) -> int:
        if self.tss is not None:
            return self.tss
        return int(self.duration_minutes * self.intensity.tss_multiplier)

    @property
    def formatted_duration(self) -> str:
        return format_minutes(self.duration_minutes)


class MobilityLog(BaseModel):
    id: str = Field(default_factory=new_id)
    date: date
    routine_name: str = "Bike-Mobility & Knee Health"
    duration_minutes: int = Field(..., ge=0)
    exercises_completed: int = Field(..., ge=0)
    total_exercises: int = Field(..., ge=0)
    notes: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.exercises_completed >= self.total_exercises


class WeeklyWorkoutSummary(BaseModel):
    week_start_date: date
    total_workouts: int = 0
    total_duration_minutes: int = 0
    total_tss: int = 0
    workouts_by_type: Dict[WorkoutType, int] = Field(default_factory=dict)
    mobility_sessions_completed: int = 0

    @property
    def formatted_total_duration(self) -> str:
        return format_minutes(self.total_duration_minutes)


class MobilityExercise(BaseModel):
    name: str
    duration_seconds: int = Field(..., gt=0)
    why: str = ""
    reps_or_hold_description: Optional[str] = None


class MobilityRoutine(BaseModel):
    title: str
    exercises: List[MobilityExercise]

    @property
    def total_duration(self) -> int:
        return sum(exercise.duration_seconds for exercise in self.exercises)


# Goals and profile
class GoalCategory(str, Enum):
    PRESENCE = "presence"
    HEALTH = "health"
    OUTDOORS = "outdoors"
    FITNESS = "fitness"
    PHONE = "phone"


class Goal(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1, max_length=500)
    category: GoalCategory
    is_high_level: bool = True  # Vision goal; False for a measurable KPI
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def progress(self) -> Optional[float]:
        if self.target_value is None or self.current_value is None or self.target_value <= 0:
            return None
        return min(self.current_value / self.target_value, 1.0)


class UserProfile(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = "User"
    daily_water_target: float = Field(default=DEFAULT_WATER_TARGET_OUNCES, gt=0)
    daily_protein_target: float = Field(default=DEFAULT_PROTEIN_TARGET_GRAMS, ge=0)
    first_weekday: int = Field(default=DEFAULT_FIRST_WEEKDAY, ge=1, le=7)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class WidgetSnapshot(BaseModel):
    score: float = 0.0
    habits_completed_count: int = 0
    habits_total_count: int = 0
    water_current: float = 0.0
    water_target: float = DEFAULT_WATER_TARGET_OUNCES
    next_cleaning_task_title: Optional[str] = None
    did_read_today: bool = False
    generated_at: datetime = Field(default_factory=datetime.now)

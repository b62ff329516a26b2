"""
Application-wide constants and environment defaults.
"""
import os

# Environment configuration
DB_URL = os.getenv("LIFETRACK_DB_URL", "sqlite:///./lifetrack.db")
DEFAULT_LOG_DIRECTORY = os.getenv("LIFETRACK_LOG_DIR", "./logs")
DEFAULT_LOG_DIRECTORY_FALLBACK = "./.lifetrack-logs"
DEFAULT_LOG_FILE = os.getenv("LIFETRACK_LOG_FILE", "lifetrack.log")
REFRESH_INTERVAL_MINUTES = int(os.getenv("LIFETRACK_REFRESH_MINUTES", "15"))

# Storage keys (one JSON array/document per key)
KEY_USER_PROFILE = "user_profile"
KEY_GOALS = "goals"
KEY_HABIT_TEMPLATES = "habit_templates"
KEY_HABIT_LOGS = "habit_logs"
KEY_CLEANING_TASKS = "cleaning_tasks"
KEY_CLEANING_LOGS = "cleaning_logs"
KEY_WATER_LOGS = "water_logs"
KEY_BOOKS = "books"
KEY_READING_SESSIONS = "reading_sessions"
KEY_DAY_SUMMARIES = "day_summaries"
KEY_WORKOUTS = "workouts"
KEY_MOBILITY_LOGS = "mobility_logs"
KEY_WIDGET_SNAPSHOT = "widget_snapshot"

# Recurrence kinds
RECURRENCE_DAILY = "daily"
RECURRENCE_WEEKLY = "weekly"
RECURRENCE_BIWEEKLY = "biweekly"
RECURRENCE_MONTHLY = "monthly"
RECURRENCE_CUSTOM = "custom"

RECURRENCE_INTERVAL_DAYS = {
    RECURRENCE_DAILY: 1,
    RECURRENCE_WEEKLY: 7,
    RECURRENCE_BIWEEKLY: 14,
    RECURRENCE_MONTHLY: 30,
}

# Habit frequency kinds
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY_COUNT = "weekly_count"
FREQUENCY_SPECIFIC_WEEKDAYS = "specific_weekdays"
FREQUENCY_CUSTOM = "custom"

# Weekdays use 1 = Sunday ... 7 = Saturday
SUNDAY = 1
MONDAY = 2
SATURDAY = 7
DEFAULT_FIRST_WEEKDAY = SUNDAY

# Cleaning rotation
MAX_DAILY_CLEANING_TASKS = 3

# Score weights, in points out of 100
SCORE_WEIGHT_HABITS = 50
SCORE_WEIGHT_CLEANING = 20
SCORE_WEIGHT_WATER = 15
SCORE_WEIGHT_READING = 15
MAX_SCORE = 100.0

# A day with score >= threshold counts toward the good-day streak
GOOD_DAY_SCORE_THRESHOLD = 50.0

# Water
DEFAULT_WATER_TARGET_OUNCES = 100.0
WATER_QUICK_ADD_OUNCES = (8, 12, 16, 24, 32)

# Profile defaults
DEFAULT_PROTEIN_TARGET_GRAMS = 145.0

# History
DEFAULT_RECENT_SUMMARY_COUNT = 30
DEFAULT_AVERAGE_SCORE_DAYS = 7

# Mobility timer beeps (seconds remaining)
COUNTDOWN_BEEP_SECONDS = (10, 5, 3, 2, 1)

"""
Custom exceptions for the life tracker.
Provides specific exception types for storage fallbacks and input validation.
"""


class LifeTrackException(Exception):
    """Base exception for the life tracker"""
    pass


class DocumentNotFoundException(LifeTrackException):
    """Raised when a document key has never been written"""
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Document '{key}' not found")


class DocumentDecodeException(LifeTrackException):
    """Raised when a stored document cannot be decoded"""
    def __init__(self, key: str, details: str):
        self.key = key
        self.details = details
        super().__init__(f"Document '{key}' could not be decoded: {details}")


class StorageException(LifeTrackException):
    """Raised when storage operations fail"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Storage {operation} failed: {details}")


class CleaningTaskNotFoundException(LifeTrackException):
    """Raised when a cleaning task is not found"""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Cleaning task with ID {task_id} not found")


class HabitNotFoundException(LifeTrackException):
    """Raised when a habit template is not found"""
    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(f"Habit with ID {habit_id} not found")


class BookNotFoundException(LifeTrackException):
    """Raised when a book is not found"""
    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book with ID {book_id} not found")


class GoalNotFoundException(LifeTrackException):
    """Raised when a goal is not found"""
    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal with ID {goal_id} not found")


class CoreHabitDeletionException(LifeTrackException):
    """Raised when trying to delete a core habit"""
    def __init__(self, habit_id: str):
        self.habit_id = habit_id
        super().__init__(
            f"Habit {habit_id} is a core habit and can only be deactivated"
        )


class ValidationException(LifeTrackException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")


class TimerStateException(LifeTrackException):
    """Raised when a timer transition is not allowed from the current state"""
    def __init__(self, state: str, action: str):
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} timer while {state}")

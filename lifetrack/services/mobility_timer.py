"""
Mobility routine countdown.

A cooperative state machine over a routine of timed exercises:
Idle -> Running <-> Paused, each exercise counting down on tick() and
advancing at zero, until Complete. The caller drives tick() once per second.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from lifetrack.constants import COUNTDOWN_BEEP_SECONDS
from lifetrack.defaults import BIKE_MOBILITY_ROUTINE
from lifetrack.exceptions import TimerStateException
from lifetrack.schemas import MobilityExercise, MobilityRoutine

logger = logging.getLogger("lifetrack.mobility")


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class BeepType(str, Enum):
    START = "start"
    COUNTDOWN = "countdown"
    EXERCISE_COMPLETE = "exercise_complete"
    COMPLETE = "complete"


class MobilityTimer:
    """Countdown through the exercises of a mobility routine"""

    def __init__(
        self,
        routine: MobilityRoutine = BIKE_MOBILITY_ROUTINE,
        on_beep: Optional[Callable[[BeepType], None]] = None
    ):
        self.routine = routine
        self.on_beep = on_beep
        self.current_exercise_index = 0
        self.time_remaining = 0
        self.is_running = False
        self.is_paused = False

    @property
    def state(self) -> TimerState:
        if self.is_complete:
            return TimerState.COMPLETE
        if self.is_paused:
            return TimerState.PAUSED
        if self.is_running:
            return TimerState.RUNNING
        return TimerState.IDLE

    @property
    def is_complete(self) -> bool:
        return self.current_exercise_index >= len(self.routine.exercises)

    @property
    def current_exercise(self) -> Optional[MobilityExercise]:
        if self.is_complete:
            return None
        return self.routine.exercises[self.current_exercise_index]

    @property
    def progress(self) -> float:
        """Elapsed share of the current exercise (0 when complete)"""
        exercise = self.current_exercise
        if exercise is None:
            return 0.0
        return 1.0 - self.time_remaining / exercise.duration_seconds

    # Transitions

    def start(self) -> None:
        """Start (or restart after completion); a running timer is left alone"""
        if self.is_running:
            return
        if not self.routine.exercises:
            raise TimerStateException(self.state.value, "start an empty routine")
        if self.is_complete:
            self.reset()

        self.is_running = True
        self.is_paused = False
        if self.time_remaining == 0:
            self.time_remaining = self.current_exercise.duration_seconds
        self._beep(BeepType.START)

    def pause(self) -> None:
        if self.state != TimerState.RUNNING:
            raise TimerStateException(self.state.value, "pause")
        self.is_paused = True

    def resume(self) -> None:
        if self.state != TimerState.PAUSED:
            raise TimerStateException(self.state.value, "resume")
        self.is_paused = False

    def stop(self) -> None:
        self.is_running = False
        self.is_paused = False

    def reset(self) -> None:
        self.stop()
        self.current_exercise_index = 0
        self.time_remaining = 0

    def tick(self) -> None:
        """
        Advance one second.

        Ticks outside the Running state are ignored. A tick at zero moves
        on to the next exercise.
        """
        if self.state != TimerState.RUNNING:
            return
        if self.time_remaining <= 0:
            self.skip_to_next()
            return

        self.time_remaining -= 1
        if self.time_remaining in COUNTDOWN_BEEP_SECONDS:
            self._beep(BeepType.COUNTDOWN)
        if self.time_remaining == 0:
            self._beep(BeepType.EXERCISE_COMPLETE)

    def skip_to_next(self) -> None:
        if self.is_complete:
            raise TimerStateException(self.state.value, "skip forward")
        self.current_exercise_index += 1

        if self.is_complete:
            self.stop()
            self.time_remaining = 0
            self._beep(BeepType.COMPLETE)
            logger.info(f"Completed routine '{self.routine.title}'")
        else:
            self.time_remaining = self.current_exercise.duration_seconds
            self._beep(BeepType.START)

    def skip_to_previous(self) -> None:
        """Go back one exercise; no-op on the first exercise"""
        if self.current_exercise_index > 0:
            self.current_exercise_index -= 1
            self.time_remaining = self.current_exercise.duration_seconds
            self._beep(BeepType.START)

    def formatted_time_remaining(self) -> str:
        minutes, seconds = divmod(self.time_remaining, 60)
        return f"{minutes}:{seconds:02d}"

    def _beep(self, beep: BeepType) -> None:
        if self.on_beep is not None:
            self.on_beep(beep)

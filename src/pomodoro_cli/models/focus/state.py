"""Phase and timer state for a single countdown."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PhaseKind(str, Enum):
    """Kind of interval in a Pomodoro session."""

    WORK = "work"
    BREAK = "break"


class ControlSignal(Enum):
    """User-originated instruction delivered to the running phase."""

    PAUSE_TOGGLE = "pause_toggle"
    QUIT = "quit"


class PhaseOutcome(Enum):
    """How a phase ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Phase:
    """One contiguous work or break interval."""

    kind: PhaseKind
    duration_seconds: int
    label: str
    session_number: int = 1

    def __post_init__(self):
        if self.duration_seconds <= 0:
            raise ValueError("Phase duration must be positive")
        if not self.label:
            raise ValueError("Phase label must not be empty")

    @property
    def is_work(self) -> bool:
        return self.kind is PhaseKind.WORK


@dataclass
class TimerState:
    """Mutable countdown state owned by the engine for one phase.

    ``remaining_seconds`` only ever decreases, and only while the timer
    is neither paused nor cancelled.
    """

    remaining_seconds: int
    paused: bool = False
    cancelled: bool = False

    def __post_init__(self):
        if self.remaining_seconds < 0:
            raise ValueError("remaining_seconds must be >= 0")

    @property
    def running(self) -> bool:
        return not (self.paused or self.cancelled)

    @property
    def finished(self) -> bool:
        return self.remaining_seconds == 0

    def tick(self, seconds: int = 1) -> int:
        """Count down by *seconds* if running. Returns the seconds consumed."""
        if not self.running or seconds <= 0:
            return 0
        consumed = min(seconds, self.remaining_seconds)
        self.remaining_seconds -= consumed
        return consumed

    def toggle_pause(self) -> bool:
        """Flip the paused flag. Returns the new value."""
        if not self.cancelled:
            self.paused = not self.paused
        return self.paused

    def cancel(self) -> None:
        self.cancelled = True

    def apply(self, signal: ControlSignal) -> None:
        """Apply a control signal to this state."""
        if signal is ControlSignal.QUIT:
            self.cancel()
        elif signal is ControlSignal.PAUSE_TOGGLE:
            self.toggle_pause()


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS (minutes are not wrapped at 60)."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{secs:02d}"


def split_duration(seconds: float) -> tuple[int, int, int]:
    """Decompose a duration in seconds into (hours, minutes, seconds)."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    return hours, mins, secs


@dataclass
class SessionResult:
    """Summary of a whole Pomodoro run."""

    started_at: datetime
    finished_at: datetime
    elapsed_seconds: float
    phases_completed: int = 0
    work_sessions_completed: int = 0
    cancelled: bool = False

    @property
    def elapsed_parts(self) -> tuple[int, int, int]:
        return split_duration(self.elapsed_seconds)

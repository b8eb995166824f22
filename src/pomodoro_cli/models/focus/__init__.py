"""Focus mode - the Pomodoro countdown, its controls and its display."""

from .cycling import PomodoroPlan
from .engine import CountdownEngine
from .keyboard import InputListener, KeyboardHandler
from .signals import SignalChannel
from .state import (
    ControlSignal,
    Phase,
    PhaseKind,
    PhaseOutcome,
    SessionResult,
    TimerState,
)
from .ui import (
    TimerDisplay,
    show_completion_message,
    show_stopped_message,
)

__all__ = [
    "ControlSignal",
    "CountdownEngine",
    "InputListener",
    "KeyboardHandler",
    "Phase",
    "PhaseKind",
    "PhaseOutcome",
    "PomodoroPlan",
    "SessionResult",
    "SignalChannel",
    "TimerDisplay",
    "TimerState",
    "show_completion_message",
    "show_stopped_message",
]

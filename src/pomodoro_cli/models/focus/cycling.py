"""Pomodoro cycle sequencing: alternating work and break phases."""

from dataclasses import dataclass

from .state import Phase, PhaseKind

WORK_LABEL = "🚀 Work"
BREAK_LABEL = "☕ Break"


@dataclass
class PomodoroPlan:
    """Ordered phases for a run of *count* work sessions."""

    count: int
    work_seconds: int
    break_seconds: int

    def __post_init__(self):
        if self.count < 1:
            raise ValueError("count must be at least 1")

    @property
    def total_phases(self) -> int:
        return 2 * self.count - 1

    def phases(self) -> list[Phase]:
        """Build the phase sequence: work, break, ..., work (no trailing break)."""
        sequence = []
        for number in range(1, self.count + 1):
            sequence.append(
                Phase(
                    kind=PhaseKind.WORK,
                    duration_seconds=self.work_seconds,
                    label=WORK_LABEL,
                    session_number=number,
                )
            )
            if number < self.count:
                sequence.append(
                    Phase(
                        kind=PhaseKind.BREAK,
                        duration_seconds=self.break_seconds,
                        label=BREAK_LABEL,
                        session_number=number,
                    )
                )
        return sequence

    def __iter__(self):
        return iter(self.phases())

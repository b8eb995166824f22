"""Runtime configuration for Pomodoro CLI.

Settings come from command-line options and their environment variables;
there is no configuration file.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from pomodoro_cli.models.focus.exceptions import InvalidConfigError

SECONDS_PER_MINUTE = 60


class TimerConfig(BaseModel):
    """Validated timer settings."""

    count: int = Field(default=4, ge=1, description="Number of work sessions")
    work_time: int = Field(default=25, ge=1, description="Work phase in minutes")
    break_time: int = Field(default=5, ge=1, description="Break phase in minutes")
    tick_interval: float = Field(
        default=1.0, gt=0, description="Wall-clock seconds per tick (debug)"
    )
    notifications: bool = Field(default=True)

    @property
    def work_seconds(self) -> int:
        return self.work_time * SECONDS_PER_MINUTE

    @property
    def break_seconds(self) -> int:
        return self.break_time * SECONDS_PER_MINUTE


def load_config(**overrides: Any) -> TimerConfig:
    """Build a TimerConfig, dropping unset (None) values so defaults apply."""
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return TimerConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfigError(f"Invalid timer settings - {problems}") from e

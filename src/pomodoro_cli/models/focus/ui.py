"""Terminal rendering for the countdown: live line, banners and summaries."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .exceptions import TerminalError
from .state import SessionResult, TimerState, format_clock, split_duration

KEY_HINTS = "Press space/'p' to pause or resume  •  'q' to quit"


class TimerDisplay:
    """Draws the countdown line in place and prints session messages."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._live: Live | None = None

    def render_line(self, label: str, state: TimerState, paused_for: int = 0) -> Text:
        """Build the single countdown line for *state*."""
        remaining = state.remaining_seconds
        line = Text(f"{label}: ")

        if state.paused:
            line.append(format_clock(remaining), style="bold yellow")
            line.append(" paused", style="yellow")
            if paused_for > 0:
                line.append(f" (for {format_clock(paused_for)})", style="yellow dim")
            return line

        if remaining < 60:
            color = "red"
        elif remaining < 300:
            color = "yellow"
        else:
            color = "cyan"

        line.append(format_clock(remaining), style=f"bold {color}")
        line.append(" remaining.")
        return line

    @contextmanager
    def live(self) -> Iterator[TimerDisplay]:
        """Keep one line open for in-place updates until the block exits."""
        live = Live(
            Text(""),
            console=self.console,
            auto_refresh=False,
            transient=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        try:
            live.start()
        except OSError as e:
            raise TerminalError(f"Cannot write to terminal: {e}") from e

        self._live = live
        try:
            yield self
        finally:
            self._live = None
            try:
                live.stop()
            except OSError as e:
                raise TerminalError(f"Cannot write to terminal: {e}") from e

    def write_line_inplace(self, text: Text | str) -> None:
        """Overwrite the current countdown line with *text*."""
        try:
            if self._live is not None:
                self._live.update(text, refresh=True)
            else:
                self.console.print(text)
        except OSError as e:
            raise TerminalError(f"Cannot write to terminal: {e}") from e

    def print(self, *objects, **kwargs) -> None:
        try:
            self.console.print(*objects, **kwargs)
        except OSError as e:
            raise TerminalError(f"Cannot write to terminal: {e}") from e

    def show_start(self, count: int, controls: bool = True) -> None:
        self.print(f"[bold]Starting Pomodoro cycle: {count} sessions.[/bold]")
        if controls:
            self.print(f"[dim]{KEY_HINTS}[/dim]")

    def show_session_header(self, number: int, count: int) -> None:
        self.print(f"\n[bold cyan]--- Session {number}/{count} ---[/bold cyan]")


def _format_elapsed(seconds: float) -> str:
    hours, mins, secs = split_duration(seconds)
    return f"{hours}h {mins}m {secs}s"


def show_completion_message(result: SessionResult, console: Console | None = None):
    """Show the summary after all sessions finished."""
    console = console or Console()

    panel = Panel(
        f"""[bold green]😿 I'm tired boss. 😿[/bold green]

Started at: {result.started_at.strftime("%H:%M:%S")}
Finished at: {result.finished_at.strftime("%H:%M:%S")}
Total time spent: {_format_elapsed(result.elapsed_seconds)}
Work sessions: {result.work_sessions_completed}""",
        border_style="green",
        padding=(1, 2),
    )

    console.print()
    console.print(panel)


def show_stopped_message(result: SessionResult, console: Console | None = None):
    """Show a short summary when the run is stopped early."""
    console = console or Console()

    panel = Panel(
        f"""[yellow]Pomodoro Stopped[/yellow]

Started at: {result.started_at.strftime("%H:%M:%S")}
Stopped at: {result.finished_at.strftime("%H:%M:%S")}
Time spent: {_format_elapsed(result.elapsed_seconds)}
Work sessions completed: {result.work_sessions_completed}""",
        border_style="yellow",
        padding=(1, 2),
    )

    console.print()
    console.print(panel)

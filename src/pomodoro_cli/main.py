"""Main entry point for Pomodoro CLI."""

import typer

from pomodoro_cli import __version__
from pomodoro_cli.commands.decorators import command_wrapper
from pomodoro_cli.config import load_config
from pomodoro_cli.models.focus.ui import TimerDisplay
from pomodoro_cli.services.notifier import get_notifier
from pomodoro_cli.services.session_service import SessionDriver
from pomodoro_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro",
    help="A simple Pomodoro timer for the terminal",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    if value:
        get_console().print(
            f"[bold]Pomodoro CLI[/bold] version [cyan]{__version__}[/cyan]"
        )
        raise typer.Exit()


@app.command()
@command_wrapper
def run(
    count: int = typer.Option(
        4, "--count", "-c", envvar="POMODORO_COUNT", help="Number of sessions (pomodoros)"
    ),
    work_time: int = typer.Option(
        25, "--work-time", "-w", envvar="POMODORO_WORK_TIME", help="Work time (in minutes)"
    ),
    break_time: int = typer.Option(
        5, "--break-time", "-b", envvar="POMODORO_BREAK_TIME", help="Break time (in minutes)"
    ),
    no_notify: bool = typer.Option(
        False,
        "--no-notify",
        envvar="POMODORO_NO_NOTIFY",
        help="Don't send desktop notifications",
    ),
    tick_interval: float = typer.Option(
        1.0,
        "--tick-interval",
        envvar="POMODORO_TICK_INTERVAL",
        hidden=True,
        help="Seconds of wall-clock time per tick (debugging only)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Run COUNT work sessions separated by breaks.

    Press space or 'p' to pause/resume, 'q' or Ctrl-C to quit.
    """
    config = load_config(
        count=count,
        work_time=work_time,
        break_time=break_time,
        tick_interval=tick_interval,
        notifications=not no_notify,
    )

    driver = SessionDriver(
        config,
        notifier=get_notifier(config.notifications),
        display=TimerDisplay(get_console()),
    )
    # Quitting early is a normal way to end a run, so both outcomes exit 0.
    driver.run()


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

"""Allow running as ``python -m pomodoro_cli``."""

from pomodoro_cli.main import main

main()

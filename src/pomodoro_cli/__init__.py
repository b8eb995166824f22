"""Pomodoro CLI - a terminal Pomodoro timer with desktop notifications."""

__version__ = "0.1.0"

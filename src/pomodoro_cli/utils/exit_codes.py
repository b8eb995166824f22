"""
Exit codes for Pomodoro CLI.

A user-requested quit is a normal early exit and uses SUCCESS.
"""

# Success (natural completion or user quit)
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Terminal unusable (raw mode could not be enabled, output write failed)
ERROR_TERMINAL = 3

# Monotonic clock could not be read
ERROR_CLOCK = 4


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_TERMINAL: "ERROR_TERMINAL",
        ERROR_CLOCK: "ERROR_CLOCK",
    }
    return code_names.get(code, f"UNKNOWN({code})")

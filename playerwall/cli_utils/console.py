"""
playerwall console utilities

This module provides application-wide access to Rich Console objects for
handling writing to stdout and stderr. Every message playerwall prints goes
through one of the formatting helpers below so that --quiet can silence
the stdout console in a single place.
"""

from io import StringIO

from rich.console import Console
from rich.theme import Theme

playerwall_theme = Theme(
    {
        "warning": "orange_red1",
        "fail": "bold red",
        "confirm": "green",
        "describe": "",
        "log": "dim",
    }
)

console = Console(theme=playerwall_theme)
error_console = Console(theme=playerwall_theme, stderr=True)


"""
Formatting helpers
"""


def silence():
    """
    Discard everything written to the stdout console. Warnings and failures
    still reach stderr.
    """

    console.file = StringIO()


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(
        f":exclamation_mark-emoji: [bold]warning: [/] {msg}", style="warning"
    )


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {msg}", style="fail")


def log(msg: str):
    """
    Print a timestamped diagnostic line to stdout.
    """

    console.log(msg, style="log")

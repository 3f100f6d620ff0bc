"""
playerwall Decorators

Decorators shared by the playerwall command line entry points.
"""

from sys import exit
from functools import wraps

from rich.markup import escape

from playerwall.cli_utils.console import fail


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as error:
            fail(escape(str(error)))
            exit(1)

    return wrapper

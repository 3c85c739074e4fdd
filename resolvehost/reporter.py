"""
Timestamped info/error reporting on top of rich consoles
"""

from datetime import datetime
from typing import Any, Optional

from rich.console import Console


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_message(prefix: str, template: str, *args: Any) -> str:
    """Render a %-style template with a millisecond timestamp and level prefix"""
    now = datetime.now()
    timestamp = f"{now.strftime(TIMESTAMP_FORMAT)}.{now.microsecond // 1000:03d}"
    message = template % args if args else template
    return f"{timestamp} {prefix}{message.rstrip()}"


class Reporter:
    """
    Two-stream reporter: info to stdout, errors to stderr.

    One instance is built at startup and handed to everything that
    reports. Each call writes exactly one whole line; rich serialises
    writes so concurrent callers cannot split a line.
    """

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None):
        self.out = out or Console(highlight=False)
        self.err = err or Console(stderr=True, highlight=False)

    def _emit(self, console: Console, line: str):
        console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def info(self, template: str, *args: Any):
        self._emit(self.out, format_message("INFO: ", template, *args))

    def error(self, template: str, *args: Any):
        self._emit(self.err, format_message("ERROR: ", template, *args))

"""
Metadata Source

Own the long-running playerctl process that reports now-playing changes. With --follow,
playerctl prints one line every time the active player's metadata or status changes and
keeps running until the player manager (or playerctl itself) goes away:

    $ playerctl metadata --format '<Song>...</Song>' --follow

See `man playerctl` for the format template language. markup_escape() is applied to the free
text fields so that an artist like "Simon & Garfunkel" still produces well formed XML.
"""

import subprocess
from typing import Iterator, Optional, Sequence

PLAYERCTL_FORMAT = (
    "<Song>"
    "<artist>{{markup_escape(artist)}}</artist>"
    "<title>{{markup_escape(title)}}</title>"
    "<status>{{status}}</status>"
    "</Song>"
)

PLAYERCTL_COMMAND = ("playerctl", "metadata", "--format", PLAYERCTL_FORMAT, "--follow")


class MetadataSourceError(Exception):
    """
    Raised when the metadata source process cannot be started or used.
    """

    pass


class MetadataSource:
    """
    Handle on the metadata source process.

    start() spawns the process with its stdout attached to a line buffered text pipe, lines()
    reads that pipe, wait() blocks until the process exits and stop() terminates and reaps it.
    Used as a context manager the process is started on entry and always reaped on exit:

        with MetadataSource() as source:
            for line in source.lines():
                ...
    """

    def __init__(self, command: Sequence[str] = PLAYERCTL_COMMAND, stop_timeout: float = 5.0):
        self.command = list(command)
        self.stop_timeout = stop_timeout
        self.process: Optional[subprocess.Popen] = None

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def start(self) -> "MetadataSource":
        if self.process is not None:
            raise MetadataSourceError(f"{self.command[0]} has already been started.")

        try:
            self.process = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
            )

        except OSError as error:
            raise MetadataSourceError(f"Could not start {self.command[0]}: {error}")

        return self

    def lines(self) -> Iterator[str]:
        """
        Yield lines from the process without their trailing newline until the pipe closes.
        """

        if self.process is None:
            raise MetadataSourceError(f"{self.command[0]} has not been started.")

        for line in self.process.stdout:
            yield line.rstrip("\n")

    def wait(self) -> int:
        if self.process is None:
            raise MetadataSourceError(f"{self.command[0]} has not been started.")

        return self.process.wait()

    def stop(self) -> None:
        """
        Terminate the process if it is still running, escalating to kill after stop_timeout
        seconds, and reap it. Safe to call more than once and from any thread.
        """

        if self.process is None:
            return

        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=self.stop_timeout)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()

    def close(self) -> None:
        """Close our end of the pipe. Call only once nothing is reading from lines()."""

        if self.process is not None and self.process.stdout is not None:
            self.process.stdout.close()

    def __enter__(self) -> "MetadataSource":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
        self.close()

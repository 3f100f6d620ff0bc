"""
Watcher

Tie the pieces together: every line playerctl prints becomes a Song, the Song's artist is
looked up in the wallpapers directory and the result (or the default wallpaper) is handed to
the wallpaper setter.

run() splits the work over two threads. The main thread owns the playerctl process and waits
for it to exit, a worker thread reads its output and processes one song at a time in the order
they arrive. Setting a wallpaper blocks the worker until feh exits, so a burst of track
changes is handled one after the other without any queueing of our own: unread lines simply
wait in the pipe.

If the worker fails, it stops playerctl so that the main thread stops waiting, and the error
is raised again from run() once the worker has been joined. A failure anywhere ends the run.
"""

import threading
from pathlib import Path
from typing import Callable, Iterable, Optional

from rich.markup import escape

from playerwall.config import PlayerwallConfig
from playerwall.matcher import find_wallpaper
from playerwall.metadata_source import MetadataSource
from playerwall.song import Song, SongParseError, parse_song
from playerwall.wallpaper_handler import update_wallpaper
from playerwall.cli_utils.console import confirm_success, describe, log, warn

Setter = Callable[[Path], None]


def process_song(
    config: PlayerwallConfig, song: Song, setter: Setter = update_wallpaper
) -> Optional[Path]:
    """
    Apply the wallpaper for song and return its path. An artist image takes precedence over
    the default wallpaper. Return None, without calling setter, when there is neither.
    """

    wallpaper = find_wallpaper(config.wallpapers_dir, song.artist)

    if wallpaper is None:
        if config.default is None:
            describe(f"no wallpaper found for '{escape(song.artist)}'")
            return None

        describe(f"no wallpaper found for '{escape(song.artist)}', using default")
        wallpaper = config.default

    setter(wallpaper)
    confirm_success(f":framed_picture-emoji: wallpaper set to {escape(str(wallpaper))}")
    return wallpaper


def process_line(
    config: PlayerwallConfig, line: str, setter: Setter = update_wallpaper
) -> Optional[Path]:
    """
    Parse one line of metadata output and process the resulting song. Blank lines are ignored.
    Malformed lines raise SongParseError unless config.keep_going is set, in which case they
    are reported and skipped.
    """

    if not line.strip():
        return None

    try:
        song = parse_song(line)

    except SongParseError as error:
        if not config.keep_going:
            raise
        warn(f"skipping record. {escape(str(error))}")
        return None

    describe(
        f":musical_note-emoji: {escape(song.artist)} - {escape(song.title)} ({escape(song.status)})"
    )
    return process_song(config, song, setter)


def watch(
    config: PlayerwallConfig, lines: Iterable[str], setter: Setter = update_wallpaper
) -> None:
    """Process lines strictly in order until the iterable is exhausted."""

    for line in lines:
        process_line(config, line, setter)


def run(
    config: PlayerwallConfig,
    source: Optional[MetadataSource] = None,
    setter: Setter = update_wallpaper,
) -> int:
    """
    Start source (playerctl by default), watch its output on a worker thread and block until
    it exits. Return the exit code of the source process. Any error raised by the worker is
    raised here. The source process is reaped before returning, whichever way the run ends.
    """

    if source is None:
        source = MetadataSource()

    errors = []

    def worker():
        try:
            watch(config, source.lines(), setter)
        except Exception as error:
            errors.append(error)
            source.stop()

    source.start()
    log(f"watching {escape(' '.join(source.command[:2]))} for songs")

    thread = threading.Thread(target=worker, name="playerwall-worker", daemon=True)
    thread.start()

    try:
        returncode = source.wait()
        thread.join()

    finally:
        source.stop()
        thread.join(timeout=source.stop_timeout)
        if not thread.is_alive():
            source.close()

    if errors:
        raise errors[0]

    if returncode != 0:
        warn(f"{escape(source.command[0])} exited with status {returncode}")

    return returncode

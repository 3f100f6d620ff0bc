"""
Test watcher

Validate the song -> wallpaper decisions and the two-thread run loop.

The wallpaper setter is injected, so these tests pass a MagicMock instead of calling feh
and assert on the paths it received. run() is driven by a MetadataSource whose command is a
Python script printing playerctl style lines.

*** Fixtures ***
- wallpapers_dir, default_image (defined in conftest.py)
"""

import sys
import textwrap
from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

# following entities are tested in this module:
from playerwall.watcher import process_song
from playerwall.watcher import process_line
from playerwall.watcher import watch
from playerwall.watcher import run

from playerwall.config import PlayerwallConfig
from playerwall.metadata_source import MetadataSource
from playerwall.song import Song, SongParseError
from playerwall.wallpaper_handler import WallpaperUpdateError


def song_line(artist: str, title: str = "Some Song", status: str = "Playing") -> str:
    return Song(artist, title, status).to_xml()


def source_printing(*lines: str) -> MetadataSource:
    script = textwrap.dedent(
        f"""
        import sys
        for line in {list(lines)!r}:
            print(line, flush=True)
        """
    )
    return MetadataSource([sys.executable, "-c", script], stop_timeout=5)


@pytest.fixture
def setter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def config(wallpapers_dir) -> PlayerwallConfig:
    return PlayerwallConfig(wallpapers_dir=wallpapers_dir)


@pytest.fixture
def config_with_default(wallpapers_dir, default_image) -> PlayerwallConfig:
    return PlayerwallConfig(wallpapers_dir=wallpapers_dir, default=default_image)


def test_process_song_match(config, setter, wallpapers_dir):
    applied = process_song(config, Song("radiohead", "Karma Police", "Playing"), setter)

    assert applied == wallpapers_dir / "Radiohead.jpg"
    setter.assert_called_once_with(wallpapers_dir / "Radiohead.jpg")


def test_process_song_match_beats_default(config_with_default, setter, wallpapers_dir):
    applied = process_song(config_with_default, Song("Pink Floyd", "Time", "Playing"), setter)

    assert applied == wallpapers_dir / "rock" / "Pink Floyd.png"
    setter.assert_called_once_with(wallpapers_dir / "rock" / "Pink Floyd.png")


def test_process_song_no_match_no_default(config, setter):
    assert process_song(config, Song("Muse", "Uprising", "Playing"), setter) is None

    setter.assert_not_called()


def test_process_song_no_match_uses_default(config_with_default, setter, default_image):
    applied = process_song(config_with_default, Song("Muse", "Uprising", "Playing"), setter)

    assert applied == default_image
    setter.assert_called_once_with(default_image)


def test_process_song_setter_error_propagates(config, setter):
    setter.side_effect = WallpaperUpdateError("feh exploded")

    with pytest.raises(WallpaperUpdateError):
        process_song(config, Song("Radiohead", "Creep", "Playing"), setter)


@pytest.mark.parametrize("line", ["", "   ", "\n"])
def test_process_line_blank(config, setter, line):
    assert process_line(config, line, setter) is None

    setter.assert_not_called()


def test_process_line_malformed_raises(config, setter):
    with pytest.raises(SongParseError):
        process_line(config, "<Song><artist>AC&DC</artist>", setter)


def test_process_line_malformed_keep_going(wallpapers_dir, setter):
    config = PlayerwallConfig(wallpapers_dir=wallpapers_dir, keep_going=True)

    assert process_line(config, "not xml at all", setter) is None

    setter.assert_not_called()


def test_process_line_escaped_artist(tmp_path, make_image, setter):
    image = make_image(tmp_path / "Simon & Garfunkel.png")
    line = "<Song><artist>Simon &amp; Garfunkel</artist><title>[live]</title><status>Playing</status></Song>"

    assert process_line(PlayerwallConfig(wallpapers_dir=tmp_path), line, setter) == image


def test_watch_in_order(config_with_default, setter, wallpapers_dir, default_image):
    lines = [
        song_line("Radiohead"),
        song_line("Muse"),
        "",
        song_line("Miles Davis"),
    ]

    watch(config_with_default, lines, setter)

    assert setter.call_args_list == [
        call(wallpapers_dir / "Radiohead.jpg"),
        call(default_image),
        call(wallpapers_dir / "jazz" / "Miles Davis.jpeg"),
    ]


def test_watch_stops_at_first_malformed_line(config, setter, wallpapers_dir):
    lines = [song_line("Radiohead"), "garbage", song_line("Pink Floyd")]

    with pytest.raises(SongParseError):
        watch(config, lines, setter)

    setter.assert_called_once_with(wallpapers_dir / "Radiohead.jpg")


def test_watch_keep_going(wallpapers_dir, setter):
    config = PlayerwallConfig(wallpapers_dir=wallpapers_dir, keep_going=True)
    lines = [song_line("Radiohead"), "garbage", song_line("Pink Floyd")]

    watch(config, lines, setter)

    assert setter.call_count == 2


def test_run_success(config, setter, wallpapers_dir):
    source = source_printing(song_line("Radiohead"), song_line("Pink Floyd"))

    assert run(config, source, setter) == 0

    assert setter.call_args_list == [
        call(wallpapers_dir / "Radiohead.jpg"),
        call(wallpapers_dir / "rock" / "Pink Floyd.png"),
    ]
    assert not source.running
    assert source.process.stdout.closed


def test_run_returns_source_exit_code(config, setter):
    source = MetadataSource([sys.executable, "-c", "raise SystemExit(4)"])

    assert run(config, source, setter) == 4
    setter.assert_not_called()


def test_run_worker_error_stops_source(config, setter):
    """
    The source below prints one bad line and then keeps running. The worker error must stop it
    and come back out of run() instead of leaving run() waiting on the source forever.
    """

    script = textwrap.dedent(
        """
        import time
        print("garbage", flush=True)
        time.sleep(60)
        """
    )
    source = MetadataSource([sys.executable, "-c", script], stop_timeout=5)

    with pytest.raises(SongParseError):
        run(config, source, setter)

    assert not source.running


def test_run_setter_error_propagates(config, setter):
    setter.side_effect = WallpaperUpdateError("feh exploded")
    source = source_printing(song_line("Radiohead"), song_line("Pink Floyd"))

    with pytest.raises(WallpaperUpdateError):
        run(config, source, setter)

    setter.assert_called_once()

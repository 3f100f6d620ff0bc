"""
conftest.py

Test configuration for playerwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module. Conftest.py should only be used for universal
fixtures.
"""

from pathlib import Path

import pytest
from PIL import Image

from playerwall.cli_utils import console as playerwall_console


IMAGE_FORMATS = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG", "gif": "GIF"}


@pytest.fixture
def make_image():
    """
    Return a function that writes a small solid colour image to the given path and returns
    the path. The image format follows the extension, anything that is not an image extension
    is written as PNG bytes so the file is still a real image.
    """

    def inner(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        image_format = IMAGE_FORMATS.get(path.suffix[1:].lower(), "PNG")
        Image.new("RGB", (8, 8), color=(200, 40, 40)).save(path, format=image_format)
        return path

    return inner


@pytest.fixture
def wallpapers_dir(tmp_path, make_image) -> Path:
    """
    A small wallpapers tree:

        wallpapers/Radiohead.jpg
        wallpapers/notes.txt
        wallpapers/rock/Pink Floyd.png
        wallpapers/rock/deep/the beatles.GIF     (extension case does not match)
        wallpapers/jazz/Miles Davis.jpeg
    """

    root = tmp_path / "wallpapers"
    make_image(root / "Radiohead.jpg")
    make_image(root / "rock" / "Pink Floyd.png")
    make_image(root / "rock" / "deep" / "the beatles.GIF")
    make_image(root / "jazz" / "Miles Davis.jpeg")
    (root / "notes.txt").write_text("not an image")
    return root


@pytest.fixture
def default_image(tmp_path, make_image) -> Path:
    return make_image(tmp_path / "default.png")


@pytest.fixture(autouse=True)
def restore_console():
    """--quiet swaps the stdout console's file, put it back after every test."""

    yield
    playerwall_console.console.file = None

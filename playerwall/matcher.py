"""
Matcher

Resolve an artist name to an image in the wallpapers directory. An image matches when its
file name without the extension equals the artist name, ignoring case:

    ~/Pictures/wallpapers/bands/Radiohead.jpg   matches "radiohead"
    ~/Pictures/wallpapers/radiohead-live.png    does not

The tree is scanned again for every lookup. Nothing is cached or indexed, so images added
while playerwall runs are picked up on the next song change.
"""

from pathlib import Path
from typing import Iterator, Optional, Union

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif"})


def is_image(path: Path) -> bool:
    """Extension check only, case-sensitive. The file contents are not inspected."""

    return path.suffix[1:] in IMAGE_EXTENSIONS


def walk_files(directory: Path) -> Iterator[Path]:
    """
    Yield every regular file under directory, recursively.

    Entries are visited in name order, files of a directory before the contents of its
    subdirectories, so the first match for a name is the same on every filesystem.
    Directories that cannot be listed are skipped silently, as are symlinked directories
    so that link cycles cannot trap the walk.
    """

    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError:
        return

    subdirectories = []
    for entry in entries:
        try:
            if entry.is_file():
                yield entry
            elif entry.is_dir() and not entry.is_symlink():
                subdirectories.append(entry)
        except OSError:
            continue

    for subdirectory in subdirectories:
        yield from walk_files(subdirectory)


def find_wallpaper(directory: Union[str, Path], artist: str) -> Optional[Path]:
    """
    Return the first image under directory whose stem equals artist case-insensitively,
    or None if there is no such image (including when directory does not exist).
    """

    wanted = artist.casefold()

    for path in walk_files(Path(directory)):
        if is_image(path) and path.stem.casefold() == wanted:
            return path

    return None

"""
feh Wallpaper Handler

This module handles updates to the desktop background by dropping into feh, a lightweight
image viewer that can also draw an image on the X11 root window. feh is run once per update
and exits as soon as the background is set:

    $ feh --bg-fill /path/to/image.jpg

--bg-fill scales the image to cover the whole screen, preserving aspect ratio and cropping
whatever does not fit. More information on feh background options can be found at:
https://man.finalrewind.org/1/feh/
"""

import subprocess
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

FEH_COMMAND = "feh"
FEH_MODE = "--bg-fill"


class WallpaperUpdateError(Exception):
    """
    Raised when an attempt to update the desktop background fails.
    """

    pass


def validate_image(wallpaper_location: Path) -> str:
    """
    Make sure wallpaper_location is an image Pillow can identify and return its format. Pillow
    only reads the header here, the pixel data is never loaded.
    """

    try:
        with Image.open(wallpaper_location) as image:
            return image.format

    except UnidentifiedImageError:
        raise WallpaperUpdateError(
            f"Invalid image type provided. {wallpaper_location.name} is not a valid"
            " image."
        )

    except OSError as error:
        raise WallpaperUpdateError(f"Could not read {wallpaper_location}: {error}")


def update_wallpaper(img_path: Union[str, Path]) -> None:
    """
    Update the background image to the one specified by img_path. Raise WallpaperUpdateError if issues encountered
    during attempt to update background.
    """

    wallpaper_location = Path(img_path).expanduser().resolve()

    # subsequent operations will fail if path does not exist or is not a file, so catch this.
    if not wallpaper_location.is_file():
        raise WallpaperUpdateError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    validate_image(wallpaper_location)

    """
    subprocess.CalledProcessError is raised by the run method call if a non-zero exit status is returned. This
    is your main way of determining if an issue has been encountered during the subprocess run. A missing
    feh binary surfaces as FileNotFoundError (an OSError) when the process is spawned.
    """

    try:
        subprocess.run(
            [FEH_COMMAND, FEH_MODE, str(wallpaper_location)],
            check=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

    except subprocess.CalledProcessError as error:
        raise WallpaperUpdateError(f"Could not set desktop background: {error}")

    except OSError as error:
        raise WallpaperUpdateError(f"Could not run {FEH_COMMAND}: {error}")

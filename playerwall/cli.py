"""
playerwall

Change your desktop wallpaper to match whoever is playing.

This module defines the entry point to the playerwall CLI. The 'cli' command resolves its
options into a PlayerwallConfig and hands it to the watcher, which runs until playerctl exits
or something goes wrong. Errors of any kind are reported with the "fail" console template and
the process exits with status 1.
"""

import click

from playerwall.config import DEFAULT_WALLPAPERS_DIR, load_config
from playerwall.watcher import run
from playerwall.cli_utils.console import silence
from playerwall.cli_utils.decorators import catch_errors


@click.command()
@catch_errors
@click.option(
    "--wallpapers-dir",
    "-w",
    "wallpapers_dir",
    type=str,  # kept as str so that $VARS survive until we expand them ourselves
    default=DEFAULT_WALLPAPERS_DIR,
    show_default=True,
    help="Directory searched (recursively) for <artist>.png|jpg|jpeg|gif images.",
)
@click.option(
    "--default",
    "-d",
    "default",
    type=str,
    default=None,
    help="Image to use when no artist image is found. Without it the wallpaper is left alone.",
)
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Skip malformed metadata records instead of stopping.",
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    default=True,
    help="Print all output to stdout or the terminal",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output printed to the stdout or the terminal.",
)
@click.version_option(package_name="playerwall")
def cli(wallpapers_dir, default, keep_going, verbosity):
    """
    playerwall

    Watch the now-playing metadata of your media player (via playerctl) and set the
    desktop wallpaper (via feh) to an image named after the current artist.


    ====================
    Usage:
    ====================

    Put images named after artists anywhere under your wallpapers directory, e.g.

        ~/Pictures/wallpapers/Radiohead.jpg

        ~/Pictures/wallpapers/jazz/miles davis.png

    then start watching:

        $ playerwall

    use a different directory and fall back to a default image for unknown artists:

        $ playerwall -w "$XDG_PICTURES_DIR/bands" -d ~/Pictures/default.jpg
    """

    # if verbosity is set to quiet, capture all std_out to a junk stream.
    if verbosity == "quiet":
        silence()

    config = load_config(wallpapers_dir, default, keep_going)
    run(config)


def main():

    cli()


if __name__ == "__main__":
    main()

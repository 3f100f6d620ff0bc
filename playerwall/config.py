"""
playerwall Configuration Management

playerwall has no configuration file. Everything it needs is resolved once at startup from
command line options and stored in a PlayerwallConfig dataclass, which the rest of the
application reads without ever touching raw option strings.

Option values are paths that may be written the way a shell user would write them, e.g.
"~/Pictures/wallpapers" or "$XDG_PICTURES_DIR/wallpapers". These are expanded with expand(),
which takes its home directory and environment lookups as arguments so that it can be
exercised without touching the real environment. References that cannot be resolved are
left in the path as literal text rather than treated as errors, the same way an unset
variable would survive inside single quotes.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional


DEFAULT_WALLPAPERS_DIR = "~/Pictures/wallpapers/"

# $$ (escaped dollar), ${NAME} or $NAME
_VARIABLE = re.compile(r"\$(?:(?P<dollar>\$)|\{(?P<braced>[^}]*)\}|(?P<name>[A-Za-z0-9_]+))")


class PlayerwallConfigError(Exception):
    """Raise when an issue occurs with handling playerwall configuration."""

    pass


def home_dir() -> Optional[str]:
    """Return the current user's home directory, or None if it cannot be determined."""

    try:
        return str(Path.home())
    except RuntimeError:
        return None


def expand(
    template: str,
    home_lookup: Callable[[], Optional[str]] = home_dir,
    env_lookup: Callable[[str], Optional[str]] = os.environ.get,
) -> str:
    """
    Expand a leading "~" and any $VAR / ${VAR} references in template.

    home_lookup is called with no arguments and env_lookup with a variable name; either may
    return None, in which case the reference is kept verbatim. "$$" collapses to a single "$".
    Only a "~" that makes up the whole first path component is expanded ("~" or "~/..."),
    "~user" forms are left alone. Variables are substituted first, so a variable holding
    "~/..." at the start of template is expanded to the home directory as well.
    """

    def substitute(match: re.Match) -> str:
        if match.group("dollar") is not None:
            return "$"

        name = match.group("braced")
        if name is None:
            name = match.group("name")

        value = env_lookup(name) if name else None
        return match.group(0) if value is None else value

    expanded = _VARIABLE.sub(substitute, template)

    if expanded == "~" or expanded.startswith("~/"):
        home = home_lookup()
        if home is not None:
            expanded = home + expanded[1:]

    return expanded


@dataclass(frozen=True)
class PlayerwallConfig:
    """
    Settings for a single playerwall run.

    wallpapers_dir is the root of the tree searched for artist images, default is the image
    applied when no artist image matches (None means leave the wallpaper alone) and keep_going
    controls whether a malformed metadata record stops the watcher or is skipped.
    """

    wallpapers_dir: Path = Path(expand(DEFAULT_WALLPAPERS_DIR))
    default: Optional[Path] = None
    keep_going: bool = False


def load_config(
    wallpapers_dir: str = DEFAULT_WALLPAPERS_DIR,
    default: Optional[str] = None,
    keep_going: bool = False,
    home_lookup: Callable[[], Optional[str]] = home_dir,
    env_lookup: Callable[[str], Optional[str]] = os.environ.get,
) -> PlayerwallConfig:
    """
    Build a PlayerwallConfig from raw option values, expanding both paths.
    Raise PlayerwallConfigError if a path expands to nothing.
    """

    expanded_dir = expand(wallpapers_dir, home_lookup, env_lookup)
    if not expanded_dir.strip():
        raise PlayerwallConfigError("wallpapers directory must not be empty.")

    expanded_default = None
    if default is not None:
        expanded_default = expand(default, home_lookup, env_lookup)
        if not expanded_default.strip():
            raise PlayerwallConfigError("default wallpaper must not be empty.")
        expanded_default = Path(expanded_default)

    return PlayerwallConfig(
        wallpapers_dir=Path(expanded_dir),
        default=expanded_default,
        keep_going=keep_going,
    )

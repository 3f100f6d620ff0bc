"""
Song

A Song is one now-playing metadata event as reported by playerctl. playerctl is asked to
format every event as a tiny XML document on a single line:

    <Song><artist>Radiohead</artist><title>Karma Police</title><status>Playing</status></Song>

so that artist and title values containing spaces, quotes or markup survive intact.
"""

from dataclasses import dataclass
from xml.etree import ElementTree


SONG_TAG = "Song"
SONG_FIELDS = ("artist", "title", "status")


class SongParseError(Exception):
    """
    Raised when a line from the metadata stream is not a valid Song document.
    """

    pass


@dataclass(frozen=True)
class Song:
    artist: str
    title: str
    status: str

    def to_xml(self) -> str:
        """Serialize to the single line document format read by parse_song."""

        root = ElementTree.Element(SONG_TAG)
        for field in SONG_FIELDS:
            ElementTree.SubElement(root, field).text = getattr(self, field)

        return ElementTree.tostring(root, encoding="unicode")


def parse_song(line: str) -> Song:
    """
    Parse one line of playerctl output into a Song. Raise SongParseError if the line is not
    well formed XML, is not a <Song> document, or is missing one of the fields. Fields that
    are present but empty (e.g. no artist tag on the current track) parse as "".
    """

    try:
        root = ElementTree.fromstring(line.strip())
    except ElementTree.ParseError as error:
        raise SongParseError(f"failed to parse metadata record {line.strip()!r}: {error}")

    if root.tag != SONG_TAG:
        raise SongParseError(
            f"expected a <{SONG_TAG}> record but got <{root.tag}> in {line.strip()!r}"
        )

    values = {}
    for field in SONG_FIELDS:
        value = root.findtext(field)
        if value is None:
            raise SongParseError(f"metadata record {line.strip()!r} has no <{field}>")
        values[field] = value

    return Song(**values)

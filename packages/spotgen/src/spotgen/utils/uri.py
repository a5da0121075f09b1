"""Spotify URI and link parsing utilities."""

import re

# spotify:track:xxxxxxxxxxxxxxxxxxxxxx
SPOTIFY_URI_PATTERN = re.compile(r"^spotify:track:", re.IGNORECASE)
# http(s)://open.spotify.com/track/ID
SPOTIFY_LINK_PATTERN = re.compile(
    r"^https?://open\.spotify\.com/track/", re.IGNORECASE
)

# Length of "spotify:track:"
_URI_PREFIX_LENGTH = 14
# "https:", "", "open.spotify.com", "track", ID
_LINK_ID_SEGMENT = 4


def is_spotify_uri(value: str) -> bool:
    """Check if a string is a Spotify track URI.

    Args:
        value: Candidate string, e.g. ``spotify:track:4uLU6hMCjMI75M1A2tKUQC``.

    Returns:
        True if the string starts with ``spotify:track:`` (any case).
    """
    return SPOTIFY_URI_PATTERN.match(value) is not None


def is_spotify_link(value: str) -> bool:
    """Check if a string is a Spotify web link to a track.

    Args:
        value: Candidate string, e.g. ``https://open.spotify.com/track/ID``.

    Returns:
        True if the string is an ``open.spotify.com/track/`` link (any case).
    """
    return SPOTIFY_LINK_PATTERN.match(value) is not None


def parse_track_id(value: str) -> str | None:
    """Extract the track ID embedded in a Spotify URI or link.

    The ID is taken verbatim: for URIs it is everything after the
    ``spotify:track:`` prefix, for links the fifth ``/``-separated
    segment, including any query string (``ID?si=...``).

    Args:
        value: Spotify URI, Spotify link, or free text.

    Returns:
        The track ID, or None if the string is neither a URI nor a link.
    """
    if is_spotify_uri(value):
        return value[_URI_PREFIX_LENGTH:]
    if is_spotify_link(value):
        return value.split("/")[_LINK_ID_SEGMENT]
    return None

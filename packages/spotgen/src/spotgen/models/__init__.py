"""Data models for spotgen.

Public API:
    Track - A playlist entry and its resolved metadata
    TrackResponse - Catalog response tagged full/partial
    ResponseKind, SortOrder, OutputFormat - Enums

Internal (not exported):
    spotify.py - Models for parsing Spotify Web API responses
    lastfm.py - Models for parsing Last.fm responses
"""

from spotgen.models.enums import OutputFormat, ResponseKind, SortOrder
from spotgen.models.track import Track, TrackResponse

__all__ = [
    "OutputFormat",
    "ResponseKind",
    "SortOrder",
    "Track",
    "TrackResponse",
]

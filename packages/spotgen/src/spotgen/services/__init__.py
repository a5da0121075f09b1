"""Business logic services for spotgen.

Public API:
    TrackResolver - Resolve a single entry to a Spotify track
    PlaylistGenerator - Resolve a whole document and serialize the playlist

Internal (not exported):
    parse_playlist, sort_tracks, unique_tracks, format_tracks - Document helpers
"""

from spotgen.services.playlist import GenerationResult, PlaylistGenerator
from spotgen.services.resolver import TrackResolver

__all__ = [
    "GenerationResult",
    "PlaylistGenerator",
    "TrackResolver",
]

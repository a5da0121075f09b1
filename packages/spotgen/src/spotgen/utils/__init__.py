"""Utility functions for spotgen.

Available via `from spotgen.utils import ...` for power users.
Not re-exported at the top-level `spotgen` package.
"""

from spotgen.utils.uri import is_spotify_link, is_spotify_uri, parse_track_id

__all__ = [
    "is_spotify_link",
    "is_spotify_uri",
    "parse_track_id",
]

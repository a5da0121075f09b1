"""Models for parsing Spotify Web API responses.

These are internal models used to parse and validate responses from
the Spotify Web API. Only the fields spotgen reads are declared; the
rest of the payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "AlbumRef",
    "Artist",
    "CatalogTrack",
    "SearchPage",
    "SearchResponse",
]


class SpotifyModel(BaseModel):
    """Base model for Spotify responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Artist(SpotifyModel):
    """Simplified artist object."""

    name: str = ""
    id: str | None = None


class AlbumRef(SpotifyModel):
    """Simplified album object attached to a track."""

    name: str | None = None
    id: str | None = None


class CatalogTrack(SpotifyModel):
    """Track object.

    Full track objects (from ``GET /tracks/{id}``) carry ``popularity``;
    simplified ones (from search or supplied by a caller) may not.
    """

    id: str | None = None
    name: str | None = None
    uri: str | None = None
    artists: list[Artist] = Field(default_factory=list)
    album: AlbumRef | None = None
    popularity: int | None = None


class SearchPage(SpotifyModel):
    """Paging object of track search results."""

    items: list[CatalogTrack] = Field(default_factory=list)
    total: int | None = None


class SearchResponse(SpotifyModel):
    """Response from ``GET /search?type=track``."""

    tracks: SearchPage | None = None

    @property
    def first(self) -> CatalogTrack | None:
        """First search result, or None if there are no results."""
        if self.tracks is None or not self.tracks.items:
            return None
        return self.tracks.items[0]

"""Track entity: an input entry and what is known about it so far."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from spotgen.models.enums import ResponseKind
from spotgen.models.lastfm import LastfmTrackInfo
from spotgen.models.spotify import CatalogTrack
from spotgen.utils.uri import parse_track_id

# Values returned by accessors when data is not available
NO_ID = -1
NO_POPULARITY = -1
NO_PLAYCOUNT = -1


def is_full_response(response: CatalogTrack | None) -> bool:
    """Whether a track object is full or simplified.

    A full object includes information (like popularity) that a
    simplified object does not. Popularity 0 counts as simplified.
    """
    return bool(response and response.popularity)


@dataclass(frozen=True)
class TrackResponse:
    """Catalog response tagged with its completeness.

    Attributes:
        kind: Whether the object is a full or a simplified track object.
        data: The track object itself.
    """

    kind: ResponseKind
    data: CatalogTrack

    @property
    def is_full(self) -> bool:
        return self.kind is ResponseKind.FULL


class Track:
    """A playlist entry and its Spotify and Last.fm metadata.

    A track starts out knowing only its entry text. Resolution replaces
    its response (none → partial → full) and enrichment attaches Last.fm
    info; all accessors derive from whatever is currently known.

    Accessors keep the playlist-file conventions: missing strings are
    ``''`` and missing numbers are ``-1``. Use ``track_id``, ``response``
    and ``lastfm_response`` for the None-based forms.

    Examples:
        >>> track = Track("  spotify:track:4uLU6hMCjMI75M1A2tKUQC ")
        >>> track.entry
        'spotify:track:4uLU6hMCjMI75M1A2tKUQC'
        >>> track.id
        '4uLU6hMCjMI75M1A2tKUQC'
        >>> str(track)
        'spotify:track:4uLU6hMCjMI75M1A2tKUQC'
    """

    def __init__(
        self,
        entry: str,
        response: CatalogTrack | Mapping[str, Any] | None = None,
    ) -> None:
        """Create a track entry.

        Args:
            entry: The text to resolve (title and artist, URI or link).
            response: Optional track object already known for this entry.
                Classified as full if it has a popularity, otherwise partial.
        """
        self._entry = entry.strip()
        self._response: TrackResponse | None = None
        self.lastfm_response: LastfmTrackInfo | None = None
        if response is not None:
            self.set_response(response)

    def __repr__(self) -> str:
        kind = self._response.kind.value if self._response else "unresolved"
        return f"Track({self._entry!r}, {kind})"

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def entry(self) -> str:
        """Entry string, whitespace-trimmed."""
        return self._entry

    @property
    def response(self) -> TrackResponse | None:
        """Current catalog response, or None if unresolved."""
        return self._response

    def set_response(
        self,
        response: CatalogTrack | Mapping[str, Any],
        kind: ResponseKind | None = None,
    ) -> None:
        """Replace the catalog response.

        Args:
            response: Track object (model or raw JSON mapping).
            kind: Completeness of the object. Inferred from popularity
                when omitted.
        """
        data = (
            response
            if isinstance(response, CatalogTrack)
            else CatalogTrack.model_validate(response)
        )
        if kind is None:
            kind = ResponseKind.FULL if is_full_response(data) else ResponseKind.PARTIAL
        self._response = TrackResponse(kind=kind, data=data)

    @property
    def is_full(self) -> bool:
        return self._response is not None and self._response.is_full

    @property
    def is_partial(self) -> bool:
        return self._response is not None and not self._response.is_full

    @property
    def is_resolved(self) -> bool:
        return self._response is not None

    def _full_data(self) -> CatalogTrack | None:
        if self._response is not None and self._response.is_full:
            return self._response.data
        return None

    def _data(self) -> CatalogTrack | None:
        return self._response.data if self._response is not None else None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        """Track title, or ``''`` if not available."""
        data = self._data()
        if data and data.name:
            return data.name
        return ""

    @property
    def artist(self) -> str:
        """Main artist, or ``''`` if not available."""
        data = self._data()
        if data and data.artists and data.artists[0].name:
            return data.artists[0].name.strip()
        return ""

    @property
    def artists(self) -> str:
        """All track artists, separated by ``, ``."""
        data = self._data()
        if not data:
            return ""
        return ", ".join(artist.name.strip() for artist in data.artists)

    @property
    def album(self) -> str:
        """Album name, or ``''`` if no full response is available."""
        data = self._full_data()
        if data and data.album and data.album.name:
            return data.album.name
        return ""

    @property
    def popularity(self) -> int:
        """Spotify popularity, or ``-1`` if no full response is available."""
        data = self._full_data()
        if data is None or data.popularity is None:
            return NO_POPULARITY
        return data.popularity

    @property
    def track_id(self) -> str | None:
        """Spotify ID of the track, or None if it cannot be determined.

        Taken from the response if there is one, otherwise from the entry
        when it is a Spotify URI or link. A blank ID counts as missing.
        """
        data = self._data()
        if data and data.id:
            return data.id
        track_id = parse_track_id(self._entry)
        if not track_id or not track_id.strip():
            return None
        return track_id

    @property
    def id(self) -> str | int:
        """Spotify ID of the track, or ``-1`` if not available."""
        track_id = self.track_id
        return track_id if track_id is not None else NO_ID

    @property
    def uri(self) -> str:
        """Spotify URI (``spotify:track:...``), or ``''`` if not available."""
        data = self._data()
        if data and data.uri:
            return data.uri
        return ""

    @property
    def lastfm_playcount(self) -> int:
        """Last.fm playcount, or ``-1`` if not available."""
        if self.lastfm_response is None:
            return NO_PLAYCOUNT
        playcount = self.lastfm_response.playcount
        return playcount if playcount is not None else NO_PLAYCOUNT

    @property
    def name(self) -> str:
        """Full track name on the form ``Title - Artist``.

        Just the title if the artist is unknown, ``''`` if the title is.
        """
        title = self.title
        if not title:
            return ""
        artist = self.artist
        if artist:
            return f"{title} - {artist}"
        return title

    def __str__(self) -> str:
        return self.name or self._entry

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return str(self).lower() == str(other).lower()

    def __hash__(self) -> int:
        # Follows str(), so the hash changes when a response is set. Only put
        # tracks in sets or dict keys once they are done resolving.
        return hash(str(self).lower())

"""Track resolution service."""

import logging

from spotgen.client import SpotifyProtocol
from spotgen.exceptions import TrackIdError
from spotgen.lastfm import LastfmProtocol
from spotgen.models.enums import ResponseKind
from spotgen.models.track import Track
from spotgen.utils.uri import is_spotify_link, is_spotify_uri

logger = logging.getLogger(__name__)


class TrackResolver:
    """Resolves playlist entries to Spotify tracks.

    Resolution Overview:
    ====================
    dispatch() picks exactly one step per call, first match wins:
    1. Full response present      -> nothing to do
    2. Partial response present   -> fetch_track() upgrades it to full
    3. Entry is a Spotify URI     -> fetch_track()
    4. Entry is a Spotify link    -> fetch_track()
    5. Anything else              -> search_for_track() with the entry text

    fetch_lastfm() is independent of dispatch() and can run whenever the
    track has a response to derive artist and title from.

    Provider errors are not caught here; they propagate to the caller.
    """

    def __init__(
        self,
        spotify: SpotifyProtocol,
        lastfm: LastfmProtocol | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            spotify: Spotify catalog client.
            lastfm: Optional Last.fm client, required only by fetch_lastfm().
        """
        self._spotify = spotify
        self._lastfm = lastfm

    async def dispatch(self, track: Track) -> Track | None:
        """Resolve a track as far as one step allows.

        Args:
            track: Track to resolve. Mutated in place.

        Returns:
            The track itself, or None if it had to be searched for and the
            search found nothing.
        """
        if track.is_full:
            return track
        if track.is_partial:
            return await self.fetch_track(track)
        if is_spotify_uri(track.entry):
            return await self.fetch_track(track)
        if is_spotify_link(track.entry):
            return await self.fetch_track(track)
        return await self.search_for_track(track)

    async def fetch_track(self, track: Track) -> Track:
        """Fetch the full track object by Spotify ID.

        Always replaces the current response, so a partial response is
        upgraded to a full one.

        Args:
            track: Track with a resolvable ID. Mutated in place.

        Returns:
            The track itself.

        Raises:
            TrackIdError: If the track has no resolvable Spotify ID.
        """
        track_id = track.track_id
        if track_id is None:
            raise TrackIdError(f"No Spotify ID for entry: {track.entry}")

        logger.debug("Fetching track %s for entry '%s'", track_id, track.entry)
        result = await self._spotify.get_track(track_id)
        track.set_response(result, ResponseKind.FULL)
        return track

    async def search_for_track(
        self, track: Track, query: str | None = None
    ) -> Track | None:
        """Search for a track and keep the first result.

        Only the first search result is considered. It is stored as a
        partial response.

        Args:
            track: Track to resolve. Mutated in place on success.
            query: Search text. Defaults to the track entry.

        Returns:
            The track itself, or None if the first result is missing or
            has no URI. In that case the track is left unchanged.
        """
        if query is None:
            query = track.entry

        logger.debug("Searching for '%s'", query)
        result = await self._spotify.search_tracks(query)
        first = result.first
        if first is None or not first.uri:
            logger.info("No match for '%s'", query)
            return None

        track.set_response(first, ResponseKind.PARTIAL)
        return track

    async def fetch_lastfm(self, track: Track) -> Track:
        """Fetch Last.fm info for the track's artist and title.

        Args:
            track: Track, preferably resolved. Mutated in place.

        Returns:
            The track itself.

        Raises:
            RuntimeError: If the resolver has no Last.fm client.
        """
        if self._lastfm is None:
            raise RuntimeError("TrackResolver was created without a Last.fm client")

        artist = track.artist
        title = track.title
        if not track.is_resolved:
            logger.debug("Fetching Last.fm info for unresolved entry '%s'", track.entry)
        track.lastfm_response = await self._lastfm.get_info(artist, title)
        return track

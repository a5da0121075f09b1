"""Test fixtures and configuration."""

from typing import Any

import pytest
from spotgen.models.lastfm import LastfmTrackInfo
from spotgen.models.spotify import CatalogTrack, SearchResponse


def make_track_data(
    track_id: str = "4uLU6hMCjMI75M1A2tKUQC",
    name: str = "Never Gonna Give You Up",
    artists: list[str] | None = None,
    album: str | None = "Whenever You Need Somebody",
    popularity: int | None = 77,
) -> dict[str, Any]:
    """Build a Spotify track object as returned by the Web API."""
    artists = artists if artists is not None else ["Rick Astley"]
    data: dict[str, Any] = {
        "id": track_id,
        "name": name,
        "uri": f"spotify:track:{track_id}",
        "artists": [{"name": a, "id": f"id-{a}"} for a in artists],
    }
    if album is not None:
        data["album"] = {"name": album, "id": "album123"}
    if popularity is not None:
        data["popularity"] = popularity
    return data


@pytest.fixture
def full_track_data() -> dict[str, Any]:
    """Full track object (has popularity)."""
    return make_track_data()


@pytest.fixture
def partial_track_data() -> dict[str, Any]:
    """Simplified track object (no popularity)."""
    return make_track_data(popularity=None)


@pytest.fixture
def full_track(full_track_data: dict[str, Any]) -> CatalogTrack:
    return CatalogTrack.model_validate(full_track_data)


@pytest.fixture
def partial_track(partial_track_data: dict[str, Any]) -> CatalogTrack:
    return CatalogTrack.model_validate(partial_track_data)


@pytest.fixture
def search_response(partial_track_data: dict[str, Any]) -> SearchResponse:
    """Search response with three results; the first is the expected match."""
    return SearchResponse.model_validate(
        {
            "tracks": {
                "items": [
                    partial_track_data,
                    make_track_data("second", "Second", popularity=None),
                    make_track_data("third", "Third", popularity=None),
                ],
                "total": 3,
            }
        }
    )


@pytest.fixture
def lastfm_info() -> LastfmTrackInfo:
    return LastfmTrackInfo.model_validate(
        {
            "track": {
                "name": "Never Gonna Give You Up",
                "playcount": "4567890",
                "listeners": "1234567",
            }
        }
    )


class MockSpotifyClient:
    """Mock Spotify client for testing."""

    def __init__(
        self,
        tracks: dict[str, CatalogTrack] | None = None,
        search_results: dict[str, SearchResponse] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self._tracks = tracks or {}
        self._search_results = search_results or {}
        self._errors = errors or {}
        self.get_track_calls: list[str] = []
        self.search_tracks_calls: list[str] = []

    async def get_track(self, track_id: str) -> CatalogTrack:
        """Mock get_track."""
        self.get_track_calls.append(track_id)
        if track_id in self._errors:
            raise self._errors[track_id]
        if track_id not in self._tracks:
            raise ValueError(f"No track configured for {track_id}")
        return self._tracks[track_id]

    async def search_tracks(self, query: str) -> SearchResponse:
        """Mock search_tracks."""
        self.search_tracks_calls.append(query)
        if query in self._errors:
            raise self._errors[query]
        return self._search_results.get(query, SearchResponse())


class MockLastfmClient:
    """Mock Last.fm client for testing."""

    def __init__(self, info: LastfmTrackInfo | None = None) -> None:
        self._info = info or LastfmTrackInfo()
        self.get_info_calls: list[tuple[str, str]] = []

    async def get_info(self, artist: str, title: str) -> LastfmTrackInfo:
        """Mock get_info."""
        self.get_info_calls.append((artist, title))
        return self._info


@pytest.fixture
def mock_spotify(
    full_track: CatalogTrack, search_response: SearchResponse
) -> MockSpotifyClient:
    """Mock Spotify client knowing one track and one search."""
    return MockSpotifyClient(
        tracks={full_track.id: full_track},
        search_results={"never gonna give you up": search_response},
    )


@pytest.fixture
def mock_lastfm(lastfm_info: LastfmTrackInfo) -> MockLastfmClient:
    return MockLastfmClient(lastfm_info)

"""Configuration for spotgen."""

from dataclasses import dataclass


@dataclass(frozen=True)
class APIConfig:
    """Spotify and Last.fm API configuration.

    Attributes:
        spotify_api_url: Base URL of the Spotify Web API.
        spotify_token_url: Spotify accounts endpoint for client credentials.
        lastfm_api_url: Last.fm API root.
        timeout: HTTP timeout in seconds.
        market: Optional ISO 3166-1 market code appended to track requests.
    """

    spotify_api_url: str = "https://api.spotify.com/v1"
    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    lastfm_api_url: str = "https://ws.audioscrobbler.com/2.0/"
    timeout: float = 10.0
    market: str | None = None


@dataclass(frozen=True)
class GeneratorConfig:
    """Playlist generator configuration.

    Attributes:
        concurrency: Maximum number of entries resolved at the same time.
            1 resolves entries strictly one after another.
        fetch_lastfm: Fetch Last.fm playcounts for every resolved track,
            even without an ``#ORDER BY LASTFM`` directive.
    """

    concurrency: int = 1
    fetch_lastfm: bool = False

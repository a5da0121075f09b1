"""spotgen - Generate Spotify playlists from plain-text track lists.

Each line of the input names a song: a free-text "Title - Artist" query,
a Spotify URI or an open.spotify.com link. spotgen resolves every entry
against the Spotify catalog, optionally enriches it with Last.fm
playcounts, and writes the resulting Spotify URIs.

Examples:
    Resolve a single entry:
    ```python
    from spotgen import Track, create_resolver

    async with create_resolver(client_id, client_secret) as resolver:
        track = await resolver.dispatch(Track("Hey Jude - The Beatles"))
        print(track.uri if track else "no match")
    ```

    Generate a playlist:
    ```python
    from spotgen import create_generator

    async with create_generator(client_id, client_secret) as generator:
        result = await generator.generate(Path("input.txt").read_text())
        Path("output.spotify.txt").write_text(result.output)
    ```
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from spotgen.client import SpotifyClient, SpotifyProtocol
from spotgen.config import APIConfig, GeneratorConfig
from spotgen.exceptions import (
    APIError,
    AuthenticationError,
    LastfmError,
    RateLimitError,
    SpotgenError,
    TrackIdError,
    TrackNotFoundError,
)
from spotgen.lastfm import LastfmClient, LastfmProtocol
from spotgen.models import OutputFormat, ResponseKind, SortOrder, Track, TrackResponse
from spotgen.services import GenerationResult, PlaylistGenerator, TrackResolver
from spotgen.utils.uri import is_spotify_link, is_spotify_uri, parse_track_id


@asynccontextmanager
async def create_resolver(
    client_id: str | None,
    client_secret: str | None,
    lastfm_api_key: str | None = None,
    config: APIConfig | None = None,
) -> AsyncIterator[TrackResolver]:
    """Create a TrackResolver backed by the production API clients.

    Both clients share one HTTP connection pool, closed on exit.

    Args:
        client_id: Spotify application client ID.
        client_secret: Spotify application client secret.
        lastfm_api_key: Optional Last.fm API key. Last.fm lookups fail with
            AuthenticationError when it is missing.
        config: Optional API configuration. Uses defaults if not provided.

    Yields:
        A configured TrackResolver.
    """
    config = config or APIConfig()
    async with httpx.AsyncClient(timeout=config.timeout) as http_client:
        spotify = SpotifyClient(
            client_id, client_secret, config=config, http_client=http_client
        )
        lastfm = LastfmClient(lastfm_api_key, config=config, http_client=http_client)
        yield TrackResolver(spotify, lastfm)


@asynccontextmanager
async def create_generator(
    client_id: str | None,
    client_secret: str | None,
    lastfm_api_key: str | None = None,
    config: APIConfig | None = None,
    generator_config: GeneratorConfig | None = None,
) -> AsyncIterator[PlaylistGenerator]:
    """Create a PlaylistGenerator backed by the production API clients.

    Args:
        client_id: Spotify application client ID.
        client_secret: Spotify application client secret.
        lastfm_api_key: Optional Last.fm API key, needed for
            ``#ORDER BY LASTFM``.
        config: Optional API configuration.
        generator_config: Optional generator configuration.

    Yields:
        A configured PlaylistGenerator.
    """
    async with create_resolver(
        client_id, client_secret, lastfm_api_key, config
    ) as resolver:
        yield PlaylistGenerator(resolver, generator_config)


__all__ = [
    "APIConfig",
    "APIError",
    "AuthenticationError",
    "GenerationResult",
    "GeneratorConfig",
    "LastfmClient",
    "LastfmError",
    "LastfmProtocol",
    "OutputFormat",
    "PlaylistGenerator",
    "RateLimitError",
    "ResponseKind",
    "SortOrder",
    "SpotgenError",
    "SpotifyClient",
    "SpotifyProtocol",
    "Track",
    "TrackIdError",
    "TrackNotFoundError",
    "TrackResolver",
    "TrackResponse",
    "create_generator",
    "create_resolver",
    "is_spotify_link",
    "is_spotify_uri",
    "parse_track_id",
]

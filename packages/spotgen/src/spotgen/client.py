"""Spotify Web API client."""

import logging
import time
from typing import Any, Protocol, Self
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from spotgen.config import APIConfig
from spotgen.exceptions import (
    APIError,
    AuthenticationError,
    RateLimitError,
    TrackNotFoundError,
)
from spotgen.models.spotify import CatalogTrack, SearchResponse

logger = logging.getLogger(__name__)

# Refresh the access token this many seconds before Spotify expires it
_TOKEN_EXPIRY_MARGIN = 60
# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.-~]
_URI_COMPONENT_SAFE = "!*'()"


def quote_component(value: str) -> str:
    """Percent-encode a single URL component (path segment or query value)."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


class SpotifyProtocol(Protocol):
    """Protocol for Spotify catalog clients.

    This protocol enables dependency injection and testing.
    Implement this protocol to create mock clients for testing.
    """

    async def get_track(self, track_id: str) -> CatalogTrack:
        """Fetch a full track object by ID."""
        ...

    async def search_tracks(self, query: str) -> SearchResponse:
        """Search the catalog for tracks."""
        ...


class SpotifyClient:
    """Production Spotify Web API client.

    Authenticates with the client credentials flow and wraps httpx with
    consistent error handling and response parsing. Implements
    SpotifyProtocol for type safety.

    The client does not retry: rate limiting surfaces as RateLimitError
    and every other failure as APIError for the caller to handle. The
    only exception is an expired token, which is refreshed once.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        config: APIConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Spotify application client ID.
            client_secret: Spotify application client secret.
            config: Optional API configuration. Uses defaults if not provided.
            http_client: Optional httpx client. Creates (and owns) one if
                not provided.
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._config = config or APIConfig()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)
        self._token: str | None = None
        self._token_expires_at = 0.0

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def get_track(self, track_id: str) -> CatalogTrack:
        """Fetch a full track object by ID.

        Args:
            track_id: Spotify track ID (percent-encoded here).

        Returns:
            Parsed CatalogTrack model.

        Raises:
            ValueError: If track_id is empty.
            TrackNotFoundError: If Spotify has no track with this ID.
            APIError: If the request fails or the payload is malformed.
        """
        if not track_id or not track_id.strip():
            raise ValueError("track_id cannot be empty")

        url = f"{self._config.spotify_api_url}/tracks/{quote_component(track_id)}"
        if self._config.market:
            url += f"?market={quote_component(self._config.market)}"

        data = await self.request(url)
        try:
            return CatalogTrack.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Malformed track response for {track_id}: {e}") from e

    async def search_tracks(self, query: str) -> SearchResponse:
        """Search the catalog for tracks.

        Args:
            query: Free-text query (percent-encoded here).

        Returns:
            Parsed SearchResponse model. Its items may be empty.

        Raises:
            APIError: If the request fails or the payload is malformed.
        """
        url = f"{self._config.spotify_api_url}/search?type=track&q="
        url += quote_component(query)
        if self._config.market:
            url += f"&market={quote_component(self._config.market)}"

        data = await self.request(url)
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Malformed search response for '{query}': {e}") from e

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def request(self, url: str) -> dict[str, Any]:
        """Perform an authenticated GET request.

        Args:
            url: Absolute Spotify Web API URL.

        Returns:
            Decoded JSON object.

        Raises:
            AuthenticationError: If credentials are missing or rejected.
            RateLimitError: If Spotify answers 429.
            TrackNotFoundError: If Spotify answers 404.
            APIError: For any other transport or response failure.
        """
        token = await self._get_token()
        response = await self._get(url, token)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.debug("Access token rejected, refreshing")
            token = await self._get_token(force=True)
            response = await self._get(url, token)
        return self._parse_response(response, url)

    async def _get(self, url: str, token: str) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            return await self._http.get(
                url, headers={"Authorization": f"Bearer {token}"}
            )
        except httpx.HTTPError as e:
            logger.warning("Spotify request failed for %s: %s", url, e)
            raise APIError(f"Spotify request failed: {e}") from e

    def _parse_response(self, response: httpx.Response, url: str) -> dict[str, Any]:
        status = response.status_code
        if status == httpx.codes.TOO_MANY_REQUESTS:
            retry_after = response.headers.get("Retry-After", "")
            raise RateLimitError(
                "Spotify rate limit exceeded",
                retry_after=int(retry_after) if retry_after.isdigit() else None,
            )
        if status == httpx.codes.NOT_FOUND:
            raise TrackNotFoundError(f"Not found: {url}")
        if status == httpx.codes.UNAUTHORIZED:
            raise AuthenticationError("Spotify rejected the access token")
        if status >= 400:
            message = self._error_message(response)
            logger.warning("Spotify API error %d for %s: %s", status, url, message)
            raise APIError(f"Spotify API error {status}: {message}")

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from Spotify: {e}") from e
        if not isinstance(data, dict):
            raise APIError("Unexpected response from Spotify: not a JSON object")
        return data

    def _error_message(self, response: httpx.Response) -> str:
        """Extract Spotify's error message, falling back to the reason phrase.

        Spotify error bodies look like ``{"error": {"status": 400, "message": "..."}}``.
        """
        try:
            error = response.json().get("error")
        except (ValueError, AttributeError):
            return response.reason_phrase
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return response.reason_phrase

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def _get_token(self, force: bool = False) -> str:
        """Return a valid access token, fetching a new one when needed."""
        if not force and self._token and time.monotonic() < self._token_expires_at:
            return self._token

        if not self._client_id or not self._client_secret:
            raise AuthenticationError(
                "Spotify client credentials are not configured. "
                "Set SPOTGEN_SPOTIFY_CLIENT_ID and SPOTGEN_SPOTIFY_CLIENT_SECRET."
            )

        logger.debug("Requesting Spotify access token")
        try:
            response = await self._http.post(
                self._config.spotify_token_url,
                data={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
            )
        except httpx.HTTPError as e:
            logger.warning("Spotify token request failed: %s", e)
            raise APIError(f"Spotify token request failed: {e}") from e

        if response.status_code in (httpx.codes.BAD_REQUEST, httpx.codes.UNAUTHORIZED):
            raise AuthenticationError("Spotify rejected the client credentials")
        if response.status_code >= 400:
            raise APIError(f"Spotify token request failed: {response.status_code}")

        try:
            payload = response.json()
            token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise APIError(f"Malformed token response from Spotify: {e}") from e

        expires_in = payload.get("expires_in", 3600)
        self._token = token
        self._token_expires_at = (
            time.monotonic() + int(expires_in) - _TOKEN_EXPIRY_MARGIN
        )
        return token

"""Last.fm API client."""

import logging
from typing import Any, Protocol, Self

import httpx
from pydantic import ValidationError

from spotgen.config import APIConfig
from spotgen.exceptions import APIError, AuthenticationError, LastfmError
from spotgen.models.lastfm import LastfmTrackInfo

logger = logging.getLogger(__name__)


class LastfmProtocol(Protocol):
    """Protocol for scrobble-count providers."""

    async def get_info(self, artist: str, title: str) -> LastfmTrackInfo:
        """Fetch track info (including playcount) by artist and title."""
        ...


class LastfmClient:
    """Last.fm ``track.getInfo`` client.

    Implements LastfmProtocol.
    """

    def __init__(
        self,
        api_key: str | None = None,
        config: APIConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Last.fm API key.
            config: Optional API configuration. Uses defaults if not provided.
            http_client: Optional httpx client. Creates (and owns) one if
                not provided.
        """
        self._api_key = api_key
        self._config = config or APIConfig()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def get_info(self, artist: str, title: str) -> LastfmTrackInfo:
        """Fetch track info by artist and title.

        Args:
            artist: Artist name.
            title: Track title.

        Returns:
            Parsed LastfmTrackInfo model.

        Raises:
            AuthenticationError: If no API key is configured.
            LastfmError: If Last.fm returns an error payload.
            APIError: If the request fails or the payload is malformed.
        """
        if not self._api_key:
            raise AuthenticationError(
                "Last.fm API key is not configured. Set SPOTGEN_LASTFM_API_KEY."
            )

        params = {
            "method": "track.getInfo",
            "api_key": self._api_key,
            "artist": artist,
            "track": title,
            "autocorrect": "1",
            "format": "json",
        }
        logger.debug("Last.fm track.getInfo: %s - %s", artist, title)
        try:
            response = await self._http.get(self._config.lastfm_api_url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Last.fm request failed for %s - %s: %s", artist, title, e)
            raise APIError(f"Last.fm request failed: {e}") from e

        data = self._decode(response)
        if "error" in data:
            code = data.get("error")
            message = data.get("message") or "Unknown Last.fm error"
            logger.warning(
                "Last.fm error %s for %s - %s: %s", code, artist, title, message
            )
            raise LastfmError(
                f"Last.fm error: {message}",
                code=code if isinstance(code, int) else None,
            )
        if response.status_code >= 400:
            raise APIError(f"Last.fm API error {response.status_code}")

        try:
            return LastfmTrackInfo.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Malformed Last.fm response: {e}") from e

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        # Last.fm reports most errors as JSON bodies, sometimes with a 4xx status
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON from Last.fm (status {response.status_code}): {e}"
            ) from e
        if not isinstance(data, dict):
            raise APIError("Unexpected response from Last.fm: not a JSON object")
        return data

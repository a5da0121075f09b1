"""Custom exceptions for spotgen.

All exceptions include an HTTP status_code attribute so callers embedding
spotgen in a web service can map them to responses directly.
"""


class SpotgenError(Exception):
    """Base exception for spotgen.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TrackIdError(SpotgenError):
    """No Spotify ID could be resolved for a track.

    Raised when a by-ID fetch is attempted on a track whose entry is
    neither a Spotify URI nor a Spotify link and which has no response yet.
    """

    status_code: int = 400  # Bad Request


class TrackNotFoundError(SpotgenError):
    """Track not found in the Spotify catalog."""

    status_code: int = 404  # Not Found


class AuthenticationError(SpotgenError):
    """Spotify credentials are missing or were rejected."""

    status_code: int = 401  # Unauthorized


class APIError(SpotgenError):
    """Upstream API error.

    Raised when a request to Spotify or Last.fm fails at the transport
    level, returns a non-success status, or returns a malformed payload.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class RateLimitError(APIError):
    """Spotify rate limit exceeded.

    Attributes:
        retry_after: Seconds to wait before retrying, as sent by Spotify.
    """

    status_code: int = 429  # Too Many Requests

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class LastfmError(APIError):
    """Last.fm returned an error payload.

    Attributes:
        code: Last.fm error code (e.g. 6 for "Track not found").
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        self.code = code
        super().__init__(message)

"""Models for parsing Last.fm ``track.getInfo`` responses."""

from pydantic import BaseModel, ConfigDict


class LastfmModel(BaseModel):
    """Base model for Last.fm responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class LastfmTrack(LastfmModel):
    """Track section of a ``track.getInfo`` response.

    Last.fm returns counts as strings, so they are kept raw and parsed
    by the consumer.
    """

    name: str | None = None
    playcount: str | int | None = None
    listeners: str | int | None = None


class LastfmTrackInfo(LastfmModel):
    """Response from ``track.getInfo``."""

    track: LastfmTrack | None = None

    @property
    def playcount(self) -> int | None:
        """Playcount parsed to an integer, or None if absent or unparseable."""
        if self.track is None or self.track.playcount is None:
            return None
        try:
            return int(self.track.playcount)
        except (TypeError, ValueError):
            return None

"""Enumerations for spotgen domain models."""

from enum import StrEnum


class ResponseKind(StrEnum):
    """How complete a track's catalog response is.

    - FULL: fetched by ID, includes popularity
    - PARTIAL: from search or supplied by the caller, no popularity
    """

    FULL = "full"
    PARTIAL = "partial"


class SortOrder(StrEnum):
    """Ordering applied to a generated playlist."""

    NONE = "none"
    POPULARITY = "popularity"
    LASTFM = "lastfm"


class OutputFormat(StrEnum):
    """Serialization of a generated playlist."""

    URI = "uri"
    CSV = "csv"

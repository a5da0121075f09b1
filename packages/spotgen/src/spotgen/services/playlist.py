"""Playlist generation: turn a text document of entries into Spotify URIs."""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from dataclasses import dataclass, field

from spotgen.config import GeneratorConfig
from spotgen.exceptions import AuthenticationError, SpotgenError
from spotgen.models.enums import OutputFormat, SortOrder
from spotgen.models.track import Track
from spotgen.services.resolver import TrackResolver

logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = "#"
_ORDER_DIRECTIVES = {
    "#ORDER BY POPULARITY": SortOrder.POPULARITY,
    "#ORDER BY LASTFM": SortOrder.LASTFM,
}
_UNIQUE_DIRECTIVE = "#UNIQUE"
_CSV_DIRECTIVE = "#CSV"
CSV_HEADER = ("title", "artists", "album", "uri")


@dataclass
class PlaylistDocument:
    """Parsed playlist input.

    Attributes:
        entries: Entry lines in input order, trimmed, without blanks
            or directives.
        order: Sort order requested by an ``#ORDER BY`` directive.
        unique: Whether ``#UNIQUE`` was given.
        output_format: Output serialization.
    """

    entries: list[str] = field(default_factory=list)
    order: SortOrder = SortOrder.NONE
    unique: bool = False
    output_format: OutputFormat = OutputFormat.URI


@dataclass(frozen=True)
class UnresolvedEntry:
    """An entry that could not be resolved, with the reason if known."""

    entry: str
    reason: str | None = None


@dataclass
class GenerationResult:
    """Outcome of a playlist generation.

    Attributes:
        tracks: Resolved tracks, ordered and de-duplicated as requested.
        unresolved: Entries without a match or whose lookup failed.
        output: Serialized playlist text.
    """

    tracks: list[Track] = field(default_factory=list)
    unresolved: list[UnresolvedEntry] = field(default_factory=list)
    output: str = ""

    @property
    def resolved_count(self) -> int:
        return len(self.tracks)


def parse_playlist(text: str) -> PlaylistDocument:
    """Split a playlist document into entries and directives.

    Blank lines are skipped. Lines starting with ``#`` are directives when
    they match one (case-insensitively) and comments otherwise.

    Args:
        text: Document text, one entry per line.

    Returns:
        The parsed document.
    """
    document = PlaylistDocument()
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if not line.startswith(DIRECTIVE_PREFIX):
            document.entries.append(line)
            continue

        directive = " ".join(line.upper().split())
        if directive in _ORDER_DIRECTIVES:
            document.order = _ORDER_DIRECTIVES[directive]
        elif directive == _UNIQUE_DIRECTIVE:
            document.unique = True
        elif directive == _CSV_DIRECTIVE:
            document.output_format = OutputFormat.CSV
        else:
            logger.debug("Ignoring comment: %s", line)
    return document


def unique_tracks(tracks: list[Track]) -> list[Track]:
    """Drop tracks equal to an earlier one, keeping the first occurrence."""
    result: list[Track] = []
    for track in tracks:
        if track not in result:
            result.append(track)
    return result


def sort_tracks(tracks: list[Track], order: SortOrder) -> list[Track]:
    """Sort tracks by the given order, highest first. Stable."""
    match order:
        case SortOrder.POPULARITY:
            return sorted(tracks, key=lambda t: t.popularity, reverse=True)
        case SortOrder.LASTFM:
            return sorted(tracks, key=lambda t: t.lastfm_playcount, reverse=True)
        case _:
            return list(tracks)


def format_tracks(tracks: list[Track], output_format: OutputFormat) -> str:
    """Serialize tracks as URI lines or CSV rows."""
    if output_format is OutputFormat.CSV:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for track in tracks:
            writer.writerow((track.title, track.artists, track.album, track.uri))
        return buffer.getvalue()

    return "".join(f"{track.uri}\n" for track in tracks)


class PlaylistGenerator:
    """Generates a Spotify playlist from a text document.

    Entries are resolved independently through TrackResolver, at most
    ``config.concurrency`` at a time. The output preserves input order
    unless an ``#ORDER BY`` directive asks otherwise.

    A failed lookup only drops that entry, and a failed Last.fm lookup
    only leaves its playcount unknown. Authentication failures abort the
    whole generation and cancel the entries still in flight.
    """

    def __init__(
        self, resolver: TrackResolver, config: GeneratorConfig | None = None
    ) -> None:
        self._resolver = resolver
        self._config = config or GeneratorConfig()

    async def generate(self, text: str) -> GenerationResult:
        """Resolve every entry of a document and serialize the playlist.

        Args:
            text: Playlist document.

        Returns:
            Result with resolved tracks, unresolved entries and output text.

        Raises:
            AuthenticationError: If Spotify or Last.fm credentials are missing
                or rejected.
        """
        document = parse_playlist(text)
        logger.info("Resolving %d entries", len(document.entries))

        semaphore = asyncio.Semaphore(max(1, self._config.concurrency))
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._resolve_entry(entry, document, semaphore))
                    for entry in document.entries
                ]
        except BaseExceptionGroup as e:
            # Remaining entries are cancelled by the task group
            raise e.exceptions[0] from None
        outcomes = [task.result() for task in tasks]

        result = GenerationResult()
        for outcome in outcomes:
            if isinstance(outcome, Track):
                result.tracks.append(outcome)
            else:
                result.unresolved.append(outcome)

        if document.unique:
            result.tracks = unique_tracks(result.tracks)
        result.tracks = sort_tracks(result.tracks, document.order)
        result.output = format_tracks(result.tracks, document.output_format)

        logger.info(
            "Resolved %d of %d entries (%d unresolved)",
            len(result.tracks),
            len(document.entries),
            len(result.unresolved),
        )
        return result

    async def _resolve_entry(
        self,
        entry: str,
        document: PlaylistDocument,
        semaphore: asyncio.Semaphore,
    ) -> Track | UnresolvedEntry:
        async with semaphore:
            track = Track(entry)
            try:
                resolved = await self._resolver.dispatch(track)
                if resolved is None:
                    return UnresolvedEntry(entry, "no match")

                # Popularity is only present on full track objects
                if document.order is SortOrder.POPULARITY and not resolved.is_full:
                    await self._resolver.dispatch(resolved)
            except AuthenticationError:
                raise
            except SpotgenError as e:
                logger.warning("Could not resolve '%s': %s", entry, e)
                return UnresolvedEntry(entry, e.message)

            if document.order is SortOrder.LASTFM or self._config.fetch_lastfm:
                await self._enrich(resolved)

            logger.debug("Resolved '%s' to %s", entry, resolved.uri)
            return resolved

    async def _enrich(self, track: Track) -> None:
        """Attach Last.fm info, keeping the track when the lookup fails."""
        try:
            await self._resolver.fetch_lastfm(track)
        except AuthenticationError:
            raise
        except SpotgenError as e:
            logger.warning("No Last.fm playcount for '%s': %s", track, e)

#!/usr/bin/env python3
"""Command-line interface for spotgen."""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from spotgen import create_generator, create_resolver
from spotgen.exceptions import SpotgenError
from spotgen.models.track import Track
from spotgen.services.playlist import GenerationResult
from spotgen.settings import Settings, get_settings

logger = logging.getLogger("spotgen")

DEFAULT_INPUT = Path("input.txt")
DEFAULT_OUTPUT = Path("output.spotify.txt")


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first so it can be called more than once.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise use the
            configured level (WARNING by default).
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else get_settings().log_level

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def _secret(settings: Settings, name: str) -> str | None:
    value = getattr(settings, name)
    return value.get_secret_value() if value is not None else None


def print_track_card(console: Console, track: Track) -> None:
    """Print a resolved track as a vertical card.

    Args:
        console: Rich console for output.
        track: Track to display.
    """
    table = Table(
        show_header=False,
        padding=(0, 1),
        title=f"[bold yellow]{track}[/bold yellow]",
        title_justify="left",
    )
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value", overflow="fold")

    table.add_row("Entry", track.entry)
    table.add_row("Title", track.title)
    table.add_row("Artists", track.artists)
    if track.album:
        table.add_row("Album", track.album)
    table.add_row("URI", track.uri)
    if track.popularity >= 0:
        table.add_row("Popularity", str(track.popularity))
    if track.lastfm_playcount >= 0:
        table.add_row("Playcount", f"{track.lastfm_playcount:,}")

    console.print()
    console.print(table)


def print_summary(console: Console, result: GenerationResult, output: Path) -> None:
    """Print generation summary and the entries that could not be resolved."""
    console.print(
        f"\nWrote [cyan]{result.resolved_count}[/cyan] track(s) "
        f"to [bold]{output}[/bold]"
    )
    if not result.unresolved:
        return

    table = Table(title="[yellow]Unresolved entries[/yellow]", title_justify="left")
    table.add_column("Entry", overflow="fold")
    table.add_column("Reason", style="dim")
    for item in result.unresolved:
        table.add_row(item.entry, item.reason or "")
    console.print()
    console.print(table)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Generate Spotify playlists from plain-text track lists."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="generate")
@click.argument(
    "input_path",
    metavar="INPUT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_INPUT,
)
@click.argument(
    "output_path",
    metavar="OUTPUT",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
)
@click.option(
    "-c",
    "--concurrency",
    type=click.IntRange(1, 32),
    default=None,
    help="Entries resolved concurrently (default: SPOTGEN_CONCURRENCY or 1).",
)
def generate_cmd(input_path: Path, output_path: Path, concurrency: int | None) -> None:
    """Resolve every line of INPUT and write Spotify URIs to OUTPUT.

    \b
    Each line is a "Title - Artist" query, a spotify:track: URI or an
    open.spotify.com/track/ link. Supported directives:
      #ORDER BY POPULARITY   #ORDER BY LASTFM   #UNIQUE   #CSV
    """
    console = Console()
    settings = get_settings()
    logger.debug("Reading entries from %s", input_path)
    generator_config = settings.generator_config
    if concurrency is not None:
        generator_config = replace(generator_config, concurrency=concurrency)

    async def run() -> GenerationResult:
        async with create_generator(
            settings.spotify_client_id,
            _secret(settings, "spotify_client_secret"),
            _secret(settings, "lastfm_api_key"),
            config=settings.api_config,
            generator_config=generator_config,
        ) as generator:
            return await generator.generate(input_path.read_text(encoding="utf-8"))

    try:
        with console.status("Resolving entries..."):
            result = asyncio.run(run())
    except SpotgenError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    output_path.write_text(result.output, encoding="utf-8")
    print_summary(console, result, output_path)


@main.command(name="track")
@click.argument("entry")
@click.option("--lastfm", is_flag=True, help="Also fetch the Last.fm playcount.")
def track_cmd(entry: str, lastfm: bool) -> None:
    """Resolve a single ENTRY and show its metadata.

    \b
    Examples:
      spotgen track "Hey Jude - The Beatles"
      spotgen track spotify:track:0aym2LBJBk9DAYuHHutrIl
      spotgen track https://open.spotify.com/track/0aym2LBJBk9DAYuHHutrIl
    """
    console = Console()
    settings = get_settings()

    async def run() -> Track | None:
        async with create_resolver(
            settings.spotify_client_id,
            _secret(settings, "spotify_client_secret"),
            _secret(settings, "lastfm_api_key"),
            config=settings.api_config,
        ) as resolver:
            track = Track(entry)
            # A search yields a partial response; a second step makes it full
            if await resolver.dispatch(track) is None:
                return None
            await resolver.dispatch(track)
            if lastfm:
                await resolver.fetch_lastfm(track)
            return track

    try:
        track = asyncio.run(run())
    except SpotgenError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if track is None:
        raise click.ClickException(f"No match for: {entry}")
    print_track_card(console, track)


if __name__ == "__main__":
    main()

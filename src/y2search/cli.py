"""Command-line interface using Click."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import click

from . import __version__
from .config import RETRY_DELAY, SPOTIFY_SEARCH_URL
from .exceptions import Y2SearchError
from .core.models import MetadataCandidate
from .core.page import PageAdapter
from .core.pattern_parser import TitleParser
from .core.resolver import MetadataResolver, TitlePatternStrategy
from .core.text_normalizer import normalize
from .core.watcher import ChangeWatcher
from .core.watch_page import WatchPage
from .core.page_fetcher import load_watch_page
from .core.youtube_metadata import clean_channel_name
from .utils.logging import setup_logging
from .utils.validation import validate_youtube_url, validate_title


def spotify_search_url(query: str) -> str:
    return SPOTIFY_SEARCH_URL.format(query=quote(query, safe=""))


def resolve_page(
    page: PageAdapter, retry_delay: float = RETRY_DELAY
) -> MetadataCandidate:
    """Run a ChangeWatcher on an event loop until it delivers a candidate."""
    if not (page.get_displayed_title() or "").strip():
        raise Y2SearchError("No video title found on page")

    async def _run() -> MetadataCandidate:
        loop = asyncio.get_running_loop()
        delivered: asyncio.Future = loop.create_future()

        def deliver(candidate: MetadataCandidate) -> None:
            if not delivered.done():
                delivered.set_result(candidate)

        watcher = ChangeWatcher(page, loop, deliver, retry_delay=retry_delay)
        watcher.start()
        try:
            return await asyncio.wait_for(delivered, timeout=retry_delay + 5.0)
        except asyncio.TimeoutError:
            raise Y2SearchError("Timed out waiting for a resolution")
        finally:
            watcher.stop()

    return asyncio.run(_run())


def load_page(url: Optional[str], html_file: Optional[str]) -> PageAdapter:
    if html_file:
        return WatchPage.from_file(Path(html_file), url=url)
    if not url:
        raise click.BadParameter("Provide a video URL or --html FILE")
    return load_watch_page(validate_youtube_url(url))


def echo_candidate(candidate: MetadataCandidate, as_json: bool, spotify: bool) -> None:
    payload = candidate.to_dict()
    if spotify:
        payload["spotify_url"] = spotify_search_url(candidate.search_query)

    if as_json:
        click.echo(json.dumps(payload, ensure_ascii=False))
        return

    click.echo(f"Artist: {candidate.artist}")
    click.echo(f"Song:   {candidate.song}")
    click.echo(f"Query:  {candidate.search_query}")
    click.echo(f"Source: {candidate.source.value}")
    if spotify:
        click.echo(f"Spotify: {payload['spotify_url']}")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """Y2Search - Turn YouTube video titles into music search queries."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "WARNING",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command('normalize')
@click.argument('title')
def normalize_command(title):
    """Print the normalized form of a video title."""
    click.echo(normalize(title))


@cli.command('parse')
@click.argument('title')
@click.option('--channel', default='', help='Channel name used when no artist is found')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON')
@click.option('--spotify', is_flag=True, help='Include a Spotify search URL')
@click.pass_context
def parse_command(ctx, title, channel, as_json, spotify):
    """Guess artist and song from a title alone."""
    logger = ctx.obj['logger']
    try:
        validate_title(title)
    except Y2SearchError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    parser = TitleParser(lambda: clean_channel_name(channel))
    resolver = MetadataResolver(strategies=[TitlePatternStrategy(parser)])
    echo_candidate(resolver.resolve(title).result, as_json, spotify)


@cli.command('resolve')
@click.argument('url', required=False)
@click.option('--html', 'html_file', type=click.Path(exists=True, dir_okay=False),
              help='Read a saved watch page instead of downloading URL')
@click.option('--retry-delay', type=float, default=RETRY_DELAY, show_default=True,
              help='Seconds to wait before retrying when attribution is not loaded')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON')
@click.option('--spotify', is_flag=True, help='Include a Spotify search URL')
@click.pass_context
def resolve_command(ctx, url, html_file, retry_delay, as_json, spotify):
    """Resolve artist and song for a watch page."""
    logger = ctx.obj['logger']
    try:
        page = load_page(url, html_file)
        candidate = resolve_page(page, retry_delay=retry_delay)
    except Y2SearchError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"❌ Could not read page: {e}")
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)

    echo_candidate(candidate, as_json, spotify)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()

"""RSS and Atom feed generation using feedgen."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from feedgen.feed import FeedGenerator

from blogfeed.exceptions import FeedBuildError, FeedWriteError
from blogfeed.models import Post
from config import SiteConfig

logger = logging.getLogger(__name__)

# rwxr-xr-x: a public static asset
FEED_FILE_MODE = 0o755


def _order_posts(posts: list[Post], sort_by_date: bool) -> list[Post]:
    """Keep input order, or newest first with undated posts last."""
    if not sort_by_date:
        return list(posts)
    return sorted(
        posts,
        key=lambda p: (p.date is not None, p.date or datetime.min.replace(tzinfo=UTC)),
        reverse=True,
    )


def build_feed(posts: list[Post], site: SiteConfig, generated_at: datetime) -> FeedGenerator:
    """Create a FeedGenerator holding the site identity and one entry per post.

    Args:
        posts: Loaded posts, in the order they should appear.
        site: Site identity and output settings.
        generated_at: Feed generation time (timezone-aware).

    Returns:
        Configured FeedGenerator.
    """
    fg = FeedGenerator()
    fg.load_extension("dc")
    fg.id(site.base_url)
    fg.title(site.title)
    fg.link(href=site.base_url, rel="alternate")
    fg.description(site.description)
    fg.author(name=site.author_name, email=site.author_email)
    fg.language(site.language)
    fg.updated(generated_at)
    fg.lastBuildDate(generated_at)

    for post in _order_posts(posts, site.sort_by_date):
        url = site.post_url(post.slug)
        # feedgen prepends by default, which would reverse the posts
        fe = fg.add_entry(order="append")
        fe.id(url)
        fe.guid(url, permalink=True)
        fe.link(href=url)

        if post.title:
            fe.title(post.title)
        else:
            logger.warning("Post %s has no title, using its slug", post.slug)
            fe.title(post.slug)

        if post.author:
            fe.author(name=post.author)
            # RSS <author> needs an email; dc:creator carries the bare name
            fe.dc.dc_creator(post.author)

        # Atom requires <updated> on every entry
        if post.date is not None:
            fe.published(post.date)
            fe.updated(post.date)
        else:
            fe.updated(generated_at)

        if post.description:
            fe.description(post.description, isSummary=True)

    return fg


def _serialize(fg: FeedGenerator, fmt: str) -> bytes:
    try:
        if fmt == "rss":
            return fg.rss_str(pretty=True)
        return fg.atom_str(pretty=True)
    except Exception as e:
        raise FeedBuildError(f"Couldn't generate {fmt.upper()} feed: {e}") from e


def _write_feed(path: Path, data: bytes) -> None:
    """Overwrite path with data and make it world-readable."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        path.chmod(FEED_FILE_MODE)
    except OSError as e:
        raise FeedWriteError(f"Couldn't write {path}: {e}") from e


def build_and_write(
    posts: list[Post], site: SiteConfig, generated_at: datetime | None = None
) -> tuple[Path, Path]:
    """Serialize the feed as RSS then Atom and write each file in turn.

    The RSS file is written before the Atom feed is serialized, so an Atom
    failure leaves a fresh rss.xml behind.

    Returns:
        (rss_path, atom_path)

    Raises:
        FeedBuildError: If serialization fails.
        FeedWriteError: If a file can't be written.
    """
    generated_at = generated_at or datetime.now(UTC)
    fg = build_feed(posts, site, generated_at)

    for fmt, path in (("rss", site.rss_path), ("atom", site.atom_path)):
        data = _serialize(fg, fmt)
        _write_feed(path, data)
        logger.info("%s feed written to %s (%d items)", fmt.upper(), path, len(posts))

    return site.rss_path, site.atom_path

"""Orchestrator: build the site's RSS and Atom feeds from its posts."""

import logging
import sys
from pathlib import Path

from blogfeed import feed_builder, post_loader
from blogfeed.exceptions import (
    BlogFeedError,
    FeedBuildError,
    FeedWriteError,
    MetadataError,
    PostLoadError,
)
from config import SiteConfig, load_site

logger = logging.getLogger(__name__)


def generate_feeds(site: SiteConfig) -> tuple[Path, Path]:
    """Run the feed pipeline.

    Steps:
        1. Load posts and their front matter from the posts directory
        2. Build the feed, then serialize and write RSS followed by Atom

    Returns:
        (rss_path, atom_path)
    """
    logger.info("Step 1/2: Loading posts from %s...", site.posts_dir)
    try:
        posts = post_loader.load_posts(site.posts_dir, site.invalid_metadata)
    except (PostLoadError, MetadataError) as e:
        logger.error("Loading posts failed: %s", e)
        raise

    logger.info("Step 2/2: Writing feeds to %s...", site.output_dir)
    try:
        paths = feed_builder.build_and_write(posts, site)
    except (FeedBuildError, FeedWriteError) as e:
        logger.error("Feed generation failed: %s", e)
        raise

    logger.info("Feeds complete: %d items.", len(posts))
    return paths


def main() -> None:
    """Entry point for feed generation. Takes no arguments."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    )
    try:
        generate_feeds(load_site())
    except BlogFeedError:
        # Already logged above
        sys.exit(1)


if __name__ == "__main__":
    main()

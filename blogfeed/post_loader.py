"""Read blog posts and their YAML front matter from a directory."""

import logging
from datetime import UTC, date, datetime, time
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from blogfeed.exceptions import MetadataError, PostLoadError
from blogfeed.models import Post
from config import InvalidMetadataPolicy

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"

# frontmatter.loads() silently drops front matter that is not a mapping
_FRONT_MATTER = frontmatter.YAMLHandler()


def _slug_from_filename(filename: str) -> str:
    """Strip a trailing .md; other names are used as-is."""
    return filename.removesuffix(POST_SUFFIX)


def _parse_metadata(raw: bytes) -> dict[str, Any]:
    """Decode a post and return its metadata mapping.

    A leading ``---`` block is treated as front matter. A file without one is
    read as a bare YAML document, so metadata-only files work too.

    Raises:
        ValueError: If the bytes are not UTF-8 or the metadata is not valid
            YAML or not a mapping.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"not valid UTF-8: {e}") from e

    try:
        if _FRONT_MATTER.detect(text):
            fm, _ = _FRONT_MATTER.split(text)
            metadata = _FRONT_MATTER.load(fm)
        else:
            metadata = yaml.safe_load(text)
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise ValueError(f"invalid YAML: {e}") from e

    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise ValueError(f"metadata is a {type(metadata).__name__}, not a mapping")
    return metadata


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_date(value: Any, path: Path) -> datetime | None:
    """Coerce a YAML date, timestamp or ISO 8601 string to an aware datetime.

    Values without an offset are taken as UTC. Anything else is logged and
    treated as missing.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.warning("Ignoring unparseable date %r in %s", value, path)
            return None
    else:
        logger.warning("Ignoring unparseable date %r in %s", value, path)
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _post_from_metadata(metadata: dict[str, Any], slug: str, path: Path) -> Post:
    return Post(
        slug=slug,
        title=_as_text(metadata.get("title")),
        author=_as_text(metadata.get("author")),
        date=_parse_date(metadata.get("date"), path),
        description=_as_text(metadata.get("description")),
    )


def load_posts(
    directory: Path, invalid_metadata: InvalidMetadataPolicy = "skip"
) -> list[Post]:
    """Load every post in a directory, in filename order.

    Args:
        directory: Directory holding one markdown file per post.
        invalid_metadata: What to do with a file whose metadata can't be
            parsed: "skip" it with a warning, keep it with "blank" fields,
            or "fail" the run.

    Returns:
        Posts in filename order.

    Raises:
        PostLoadError: If the directory or any entry in it can't be read.
        MetadataError: If a file's metadata is malformed and the policy is "fail".
    """
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise PostLoadError(f"Couldn't read from directory {directory}: {e}") from e

    posts: list[Post] = []
    for path in entries:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise PostLoadError(f"Couldn't read file {path}: {e}") from e

        slug = _slug_from_filename(path.name)
        try:
            metadata = _parse_metadata(raw)
        except ValueError as e:
            if invalid_metadata == "fail":
                raise MetadataError(f"Malformed metadata in {path}: {e}") from e
            if invalid_metadata == "skip":
                logger.warning("Skipping %s: malformed metadata (%s)", path, e)
                continue
            logger.warning("Malformed metadata in %s, using blank fields (%s)", path, e)
            metadata = {}

        posts.append(_post_from_metadata(metadata, slug, path))

    logger.info("Loaded %d posts from %s", len(posts), directory)
    return posts

"""Centralized configuration using pydantic-settings."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

InvalidMetadataPolicy = Literal["skip", "blank", "fail"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Site identity
    base_url: str = "https://snow-dev.com"
    site_title: str = "snow-dev.com"
    site_description: str = "A blog about linux, vim, devops and various other tech topics"
    author_name: str = "Marcel Patzwahl"
    author_email: str = "marcel.patzwahl@posteo.de"
    feed_language: str = "en"

    # Paths (relative to the working directory)
    posts_dir: str = "content/posts"
    output_dir: str = "docs"

    # What to do with a post whose front matter cannot be parsed
    invalid_metadata: InvalidMetadataPolicy = "skip"

    # Order items newest first instead of by filename
    sort_by_date: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()


@dataclass(frozen=True)
class SiteConfig:
    """Everything the feed pipeline needs to know about the site."""

    base_url: str
    title: str
    description: str
    author_name: str
    author_email: str
    posts_dir: Path
    output_dir: Path
    language: str = "en"
    invalid_metadata: InvalidMetadataPolicy = "skip"
    sort_by_date: bool = False

    @property
    def rss_path(self) -> Path:
        return self.output_dir / "rss.xml"

    @property
    def atom_path(self) -> Path:
        return self.output_dir / "atom.xml"

    def post_url(self, slug: str) -> str:
        return f"{self.base_url.rstrip('/')}/posts/{slug}.html"


def load_site(source: Settings | None = None) -> SiteConfig:
    """Build a SiteConfig from settings (the module-level instance by default)."""
    s = source or settings
    return SiteConfig(
        base_url=s.base_url,
        title=s.site_title,
        description=s.site_description,
        author_name=s.author_name,
        author_email=s.author_email,
        posts_dir=Path(s.posts_dir),
        output_dir=Path(s.output_dir),
        language=s.feed_language,
        invalid_metadata=s.invalid_metadata,
        sort_by_date=s.sort_by_date,
    )

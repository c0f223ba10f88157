"""Data models for the feed pipeline."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Post:
    """A blog post read from a markdown file's front matter."""

    slug: str  # filename without the .md suffix
    title: str = ""
    author: str = ""
    date: datetime | None = None  # always timezone-aware when set
    description: str = ""

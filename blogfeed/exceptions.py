"""Custom exception hierarchy for blogfeed."""


class BlogFeedError(Exception):
    """Base exception for all blogfeed errors."""


class PostLoadError(BlogFeedError):
    """Raised when the posts directory or a post file cannot be read."""


class MetadataError(BlogFeedError):
    """Raised when a post's front matter is malformed and the policy is 'fail'."""


class FeedBuildError(BlogFeedError):
    """Raised when serializing the feed to RSS or Atom fails."""


class FeedWriteError(BlogFeedError):
    """Raised when writing a feed file to disk fails."""

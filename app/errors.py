from typing import Optional


class ContentError(Exception):
    """Base class for every error raised by a content provider."""


class ConfigurationError(ContentError):
    """A required configuration value is missing or invalid."""

    def __init__(self, variable: str, message: Optional[str] = None):
        self.variable = variable
        super().__init__(message or f"Missing environment variable: {variable}")


class ContentSourceError(ContentError):
    """The content source could not be read."""


class ContentTransportError(ContentSourceError):
    """A CMS request failed or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class PostNotFoundError(ContentError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Post with slug {slug} not found")

import datetime
import logging
import re
from typing import Iterable, List, Optional

from app.schemas.blog import PostSummary

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify_category(value: str) -> str:
    """Lowercase a category label and hyphenate its whitespace runs."""
    return _WHITESPACE.sub("-", str(value).strip().lower())


def category_slug(
    fields: Optional[dict], *, slugify_explicit: bool = True
) -> Optional[str]:
    """
    Derive a category slug from a category record.
    The explicit slug wins; otherwise the display name is slugified.
    With slugify_explicit=False an explicit slug is returned untouched.
    """
    if not fields:
        return None
    explicit = fields.get("slug")
    if explicit and not slugify_explicit:
        return str(explicit)
    raw = explicit or fields.get("name")
    if not raw:
        return None
    return slugify_category(raw)


def absolute_image_url(
    url: Optional[str], origin: Optional[str] = None
) -> Optional[str]:
    """
    Turn a provider image reference into a fully qualified URL.

    Protocol-relative URLs (//host/path) get an https scheme, absolute
    http(s) URLs are left alone and relative paths are prefixed with origin.
    """
    if not url:
        return None
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith(("http://", "https://")):
        return url
    if origin:
        return f"{origin.rstrip('/')}/{url.lstrip('/')}"
    return url


def coerce_date(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def coerce_categories(value) -> List[str]:
    """Categories must be a list; anything else counts as absent."""
    if not isinstance(value, (list, tuple)):
        return []
    return [slugify_category(item) for item in value if item]


def is_complete(post_data: dict) -> bool:
    return bool(post_data.get("slug")) and bool(post_data.get("title"))


def build_summaries(records: Iterable[dict]) -> List[PostSummary]:
    posts = []
    for record in records:
        if not is_complete(record):
            logger.debug(f"Dropping incomplete post record: {record.get('slug')!r}")
            continue
        posts.append(PostSummary(**record))
    return posts


def sort_by_date_desc(posts: List[PostSummary]) -> List[PostSummary]:
    # Plain string comparison, so mixed date formats do not sort by calendar.
    return sorted(posts, key=lambda p: p.date or "", reverse=True)


def extract_categories(posts: Iterable[PostSummary]) -> List[str]:
    return sorted({category for post in posts for category in post.categories})

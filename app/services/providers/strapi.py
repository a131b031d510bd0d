import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from app.errors import PostNotFoundError
from app.schemas.blog import PostDetail, PostSummary
from app.services.normalization import (
    absolute_image_url,
    build_summaries,
    category_slug,
    coerce_date,
)
from app.services.providers.base import ContentProvider
from app.services.providers.http import build_client, fetch_json
from app.settings import Settings

logger = logging.getLogger(__name__)

POPULATE = "categories,image"


class StrapiConfig(BaseModel):
    base_url: str = "http://localhost:1337"
    api_token: str = ""
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "StrapiConfig":
        return cls(
            base_url=settings.STRAPI_URL or "http://localhost:1337",
            api_token=settings.STRAPI_API_TOKEN,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    @property
    def origin(self) -> str:
        return self.base_url.rstrip("/")

    @property
    def posts_url(self) -> str:
        return f"{self.origin}/api/posts"


class StrapiProvider(ContentProvider):
    """Posts served by a Strapi collection type under /api/posts."""

    name = "strapi"

    def __init__(self, config: StrapiConfig, client: Optional[httpx.Client] = None):
        self.config = config
        headers = {}
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        self.client = client or build_client(config.timeout, headers=headers)

    def list_posts(self) -> List[PostSummary]:
        data = fetch_json(
            self.client,
            self.config.posts_url,
            params={"populate": POPULATE, "sort": "date:desc"},
            source="Strapi",
        )
        posts = build_summaries(
            normalize_record(item, self.config.origin)
            for item in data.get("data") or []
        )
        logger.info(f"Fetched {len(posts)} posts from Strapi")
        return posts

    def get_post(self, slug: str) -> PostDetail:
        data = fetch_json(
            self.client,
            self.config.posts_url,
            params={"filters[slug][$eq]": slug, "populate": POPULATE},
            source="Strapi",
        )
        items = data.get("data") or []
        if not items:
            raise PostNotFoundError(slug)

        item = items[0]
        summaries = build_summaries([normalize_record(item, self.config.origin)])
        if not summaries:
            raise PostNotFoundError(slug)

        attrs = _attributes(item)
        return PostDetail(
            **summaries[0].model_dump(),
            content=attrs.get("content") or "",
            contentFormat="markdown",
        )

    def close(self) -> None:
        self.client.close()


def _attributes(record: Optional[dict]) -> dict:
    # Strapi v4 wraps fields in "attributes"; v5 returns them flat.
    if not record:
        return {}
    return record.get("attributes", record) or {}


def _relation_data(value):
    if isinstance(value, dict) and "data" in value:
        return value["data"]
    return value


def normalize_record(item: dict, origin: str) -> dict:
    """Flatten one Strapi post record into PostSummary fields."""
    attrs = _attributes(item)

    categories = []
    for category in _relation_data(attrs.get("categories")) or []:
        slug = category_slug(_attributes(category), slugify_explicit=False)
        if slug:
            categories.append(slug)

    image_url = _attributes(_relation_data(attrs.get("image"))).get("url")

    return {
        "slug": attrs.get("slug") or "",
        "title": attrs.get("title") or "",
        "date": coerce_date(attrs.get("date")),
        "excerpt": attrs.get("excerpt") or "",
        "categories": categories,
        "image": absolute_image_url(image_url, origin),
    }

import logging
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel

from app.errors import ConfigurationError, PostNotFoundError
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

CONTENT_TYPE = "post"
CATEGORY_CONTENT_TYPE = "category"
INCLUDE_DEPTH = 2


class ContentfulConfig(BaseModel):
    space_id: str
    access_token: str
    environment: str = "master"
    base_url: str = "https://cdn.contentful.com"
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentfulConfig":
        return cls(
            space_id=_required("CONTENTFUL_SPACE_ID", settings.CONTENTFUL_SPACE_ID),
            access_token=_required(
                "CONTENTFUL_ACCESS_TOKEN", settings.CONTENTFUL_ACCESS_TOKEN
            ),
            environment=settings.CONTENTFUL_ENVIRONMENT or "master",
            base_url=settings.CONTENTFUL_BASE_URL or "https://cdn.contentful.com",
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    @property
    def entries_url(self) -> str:
        base = self.base_url.rstrip("/")
        return f"{base}/spaces/{self.space_id}/environments/{self.environment}/entries"


def _required(name: str, value: Optional[str]) -> str:
    if not value:
        raise ConfigurationError(name)
    return value


class ContentfulProvider(ContentProvider):
    """
    Posts served by the Contentful Content Delivery API.

    Linked categories and image assets arrive in the response's `includes`
    side table and are resolved by id against it.
    """

    name = "contentful"

    def __init__(
        self, config: ContentfulConfig, client: Optional[httpx.Client] = None
    ):
        self.config = config
        self.client = client or build_client(config.timeout)

    def list_posts(self) -> List[PostSummary]:
        data = self._entries({"order": "-fields.date"})
        assets, categories = build_lookups(data)
        posts = build_summaries(
            normalize_entry(item, assets, categories)
            for item in data.get("items") or []
        )
        logger.info(f"Fetched {len(posts)} posts from Contentful")
        return posts

    def get_post(self, slug: str) -> PostDetail:
        data = self._entries({"fields.slug": slug, "limit": 1})
        items = data.get("items") or []
        if not items:
            raise PostNotFoundError(slug)

        item = items[0]
        assets, categories = build_lookups(data)
        summaries = build_summaries([normalize_entry(item, assets, categories)])
        if not summaries:
            raise PostNotFoundError(slug)

        fields = item.get("fields") or {}
        return PostDetail(
            **summaries[0].model_dump(),
            content=fields.get("content") or "",
            contentFormat="markdown",
        )

    def close(self) -> None:
        self.client.close()

    def _entries(self, extra_params: dict) -> dict:
        params = {
            "access_token": self.config.access_token,
            "content_type": CONTENT_TYPE,
            "include": INCLUDE_DEPTH,
            **extra_params,
        }
        return fetch_json(
            self.client, self.config.entries_url, params=params, source="Contentful"
        )


def _sys_id(ref) -> Optional[str]:
    if not isinstance(ref, dict):
        return None
    return (ref.get("sys") or {}).get("id")


def build_lookups(data: dict) -> Tuple[Dict[str, dict], Dict[str, dict]]:
    """Index the `includes` side table: asset id -> asset, entry id -> category."""
    includes = data.get("includes") or {}
    assets = {}
    for asset in includes.get("Asset") or []:
        asset_id = _sys_id(asset)
        if asset_id:
            assets[asset_id] = asset

    categories = {}
    for entry in includes.get("Entry") or []:
        content_type = _sys_id((entry.get("sys") or {}).get("contentType"))
        entry_id = _sys_id(entry)
        if entry_id and content_type == CATEGORY_CONTENT_TYPE:
            categories[entry_id] = entry
    return assets, categories


def normalize_entry(
    item: dict, assets: Dict[str, dict], categories: Dict[str, dict]
) -> dict:
    """Flatten one Contentful post entry into PostSummary fields."""
    fields = item.get("fields") or {}

    category_slugs = []
    for ref in fields.get("categories") or []:
        category = categories.get(_sys_id(ref))
        if category is None:
            # Unresolved references are dropped rather than given a fake label.
            logger.debug(
                f"Dropping unresolved category {_sys_id(ref)!r} on post {fields.get('slug')!r}"
            )
            continue
        slug = category_slug(category.get("fields"))
        if slug:
            category_slugs.append(slug)

    image = None
    asset = assets.get(_sys_id(fields.get("image")))
    if asset:
        file_info = (asset.get("fields") or {}).get("file") or {}
        image = absolute_image_url(file_info.get("url"))

    return {
        "slug": fields.get("slug") or "",
        "title": fields.get("title") or "",
        "date": coerce_date(fields.get("date")),
        "excerpt": fields.get("excerpt") or "",
        "categories": category_slugs,
        "image": image,
    }

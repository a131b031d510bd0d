import logging
from pathlib import Path
from typing import Iterable, List, Optional

import frontmatter
from pydantic import BaseModel

from app.errors import ContentSourceError, PostNotFoundError
from app.schemas.blog import PostDetail, PostSummary
from app.services.markdown_renderer import render_markdown
from app.services.normalization import (
    absolute_image_url,
    build_summaries,
    coerce_categories,
    coerce_date,
    extract_categories,
    is_complete,
    sort_by_date_desc,
)
from app.services.providers.base import ContentProvider
from app.settings import Settings

logger = logging.getLogger(__name__)


class FilesystemConfig(BaseModel):
    posts_dir: Path
    extension: str = ".md"
    site_url: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "FilesystemConfig":
        return cls(
            posts_dir=Path(settings.POSTS_DIR),
            extension=settings.POSTS_EXTENSION,
            site_url=settings.SITE_URL,
        )


class FilesystemProvider(ContentProvider):
    """Posts stored as Markdown files with a YAML frontmatter header."""

    name = "filesystem"

    def __init__(self, config: FilesystemConfig):
        self.config = config

    def list_posts(self) -> List[PostSummary]:
        records = []
        for path in self._post_files():
            post_data = self._read_post_data(path)
            if post_data:
                records.append(post_data)
        return sort_by_date_desc(build_summaries(records))

    def get_post(self, slug: str) -> PostDetail:
        path = self._path_for(slug)
        if path is None or not path.is_file():
            raise PostNotFoundError(slug)

        parsed = frontmatter.load(str(path))
        post_data = parse_metadata(parsed.metadata, path.stem, self.config.site_url)
        summaries = build_summaries([post_data])
        if not summaries:
            raise PostNotFoundError(slug)

        return PostDetail(
            **summaries[0].model_dump(),
            content=render_markdown(parsed.content),
            contentFormat="html",
        )

    def list_categories(
        self, posts: Optional[Iterable[PostSummary]] = None
    ) -> List[str]:
        if posts is not None:
            return extract_categories(posts)

        found = set()
        for path in self._post_files():
            try:
                metadata = frontmatter.load(str(path)).metadata
            except Exception as e:
                logger.warning(f"Skipping {path.name}: unreadable frontmatter ({e})")
                continue
            if not is_complete(parse_metadata(metadata, path.stem)):
                logger.debug(f"Skipping {path.name}: post has no title")
                continue
            categories = metadata.get("categories")
            if not isinstance(categories, (list, tuple)):
                logger.debug(f"Skipping {path.name}: categories is not a list")
                continue
            found.update(coerce_categories(categories))
        return sorted(found)

    def _post_files(self) -> List[Path]:
        posts_dir = self.config.posts_dir
        try:
            return sorted(
                p
                for p in posts_dir.iterdir()
                if p.is_file() and p.suffix == self.config.extension
            )
        except OSError as e:
            raise ContentSourceError(
                f"Failed to read posts directory {posts_dir}: {e}"
            ) from e

    def _path_for(self, slug: str) -> Optional[Path]:
        if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
            return None
        return self.config.posts_dir / f"{slug}{self.config.extension}"

    def _read_post_data(self, path: Path) -> Optional[dict]:
        try:
            parsed = frontmatter.load(str(path))
        except Exception as e:
            logger.warning(f"Failed to parse post {path.name}: {e}")
            return None
        return parse_metadata(parsed.metadata, path.stem, self.config.site_url)


def parse_metadata(metadata: dict, slug: str, site_url: str = "") -> dict:
    """Map a frontmatter header onto PostSummary fields."""
    metadata = metadata or {}
    title = metadata.get("title")
    return {
        "slug": slug,
        "title": str(title) if title else "",
        "date": coerce_date(metadata.get("date")),
        "excerpt": str(metadata.get("excerpt") or ""),
        "categories": coerce_categories(metadata.get("categories")),
        "image": absolute_image_url(metadata.get("image"), site_url or None),
    }

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pydantic import BaseModel

from app.errors import PostNotFoundError
from app.schemas.blog import CategoryPage, HomePage, PostPage
from app.services.markdown_renderer import to_html
from app.services.providers.base import ContentProvider

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    posts: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)


def is_safe_name(name: str) -> bool:
    """A slug may only become a single file name inside the output tree."""
    if not name or name.startswith("."):
        return False
    return "/" not in name and "\\" not in name


class SiteBuilder:
    """
    One-shot generation of page data for the static site.

    Writes index.json, categories/index.json, category/<category>.json and
    posts/<slug>.json under output_dir. A post that disappears between the
    listing and its detail fetch is skipped; any other error aborts the build.
    Slugs that cannot be used as a file name are logged and rejected.
    """

    def __init__(self, provider: ContentProvider, output_dir: Path):
        self.provider = provider
        self.output_dir = Path(output_dir)

    def build(self) -> BuildReport:
        report = BuildReport()

        posts = self.provider.list_posts()
        categories = self.provider.list_categories(posts)
        self._write("index.json", HomePage(posts=posts, categories=categories))
        logger.info(f"Wrote home page with {len(posts)} posts")

        self._write_json("categories/index.json", categories)
        for category in categories:
            if not is_safe_name(category):
                logger.warning(
                    f"Category {category!r} is not a valid file name, skipping"
                )
                report.rejected.append(category)
                continue
            page = CategoryPage(
                category=category,
                posts=[p for p in posts if category in p.categories],
            )
            self._write(f"category/{category}.json", page)
            report.categories.append(category)

        for post in posts:
            if not is_safe_name(post.slug):
                logger.warning(
                    f"Post slug {post.slug!r} is not a valid file name, skipping"
                )
                report.rejected.append(post.slug)
                continue
            try:
                detail = self.provider.get_post(post.slug)
            except PostNotFoundError:
                logger.warning(f"Post {post.slug} vanished during build, skipping")
                report.skipped.append(post.slug)
                continue
            page = PostPage(post=detail.summary(), contentHtml=to_html(detail))
            self._write(f"posts/{post.slug}.json", page)
            report.posts.append(post.slug)

        logger.info(
            f"Built {len(report.posts)} post pages and {len(report.categories)} "
            f"category pages into {self.output_dir}"
        )
        return report

    def _write(self, relative: str, page: BaseModel) -> None:
        target = self._target(relative)
        target.write_text(page.model_dump_json(indent=2), encoding="utf-8")

    def _write_json(self, relative: str, value) -> None:
        target = self._target(relative)
        target.write_text(json.dumps(value, indent=2), encoding="utf-8")

    def _target(self, relative: str) -> Path:
        target = self.output_dir / relative
        if not target.resolve().is_relative_to(self.output_dir.resolve()):
            raise ValueError(f"Refusing to write outside {self.output_dir}: {relative}")
        target.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Writing {target}")
        return target

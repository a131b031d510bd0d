from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from app.schemas.blog import PostDetail, PostSummary
from app.services.normalization import extract_categories


class ContentProvider(ABC):
    """
    A source of blog posts for the site.
    Every provider normalizes its raw records into PostSummary/PostDetail.
    """

    name: str = ""

    @abstractmethod
    def list_posts(self) -> List[PostSummary]:
        """Return every complete post, newest first."""

    @abstractmethod
    def get_post(self, slug: str) -> PostDetail:
        """Return one post with its body; raise PostNotFoundError if absent."""

    def list_categories(
        self, posts: Optional[Iterable[PostSummary]] = None
    ) -> List[str]:
        if posts is None:
            posts = self.list_posts()
        return extract_categories(posts)

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

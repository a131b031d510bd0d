from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    slug: str
    title: str
    date: str = ""
    excerpt: str = ""
    categories: List[str] = Field(default_factory=list)
    image: Optional[str] = None


class PostDetail(PostSummary):
    content: str = ""
    contentFormat: Literal["markdown", "html"] = "markdown"

    def summary(self) -> PostSummary:
        return PostSummary(**self.model_dump(exclude={"content", "contentFormat"}))


class HomePage(BaseModel):
    posts: List[PostSummary] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class CategoryPage(BaseModel):
    category: str
    posts: List[PostSummary] = Field(default_factory=list)


class PostPage(BaseModel):
    post: PostSummary
    contentHtml: str

from typing import Optional

import markdown

from app.schemas.blog import PostDetail

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


def render_markdown(text: Optional[str]) -> str:
    """Convert a Markdown body to HTML."""
    if not text:
        return ""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def to_html(detail: PostDetail) -> str:
    if detail.contentFormat == "html":
        return detail.content
    return render_markdown(detail.content)

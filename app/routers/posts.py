import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.errors import PostNotFoundError
from app.schemas.blog import PostPage, PostSummary
from app.services.markdown_renderer import to_html
from app.services.providers.base import ContentProvider

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    category: Optional[str] = Query(None, description="Only posts in this category"),
    provider: ContentProvider = Depends(deps.get_content_provider),
):
    """Get all posts metadata, newest first."""
    try:
        posts = provider.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    if category:
        posts = [p for p in posts if category in p.categories]
    return posts


@router.get("/posts/{slug}", response_model=PostPage)
def get_post(
    slug: str,
    provider: ContentProvider = Depends(deps.get_content_provider),
):
    """Get a single post by slug, with its body rendered to HTML."""
    try:
        detail = provider.get_post(slug)
        return PostPage(post=detail.summary(), contentHtml=to_html(detail))
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

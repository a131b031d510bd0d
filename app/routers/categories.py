import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.blog import CategoryPage
from app.services.providers.base import ContentProvider

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/categories", response_model=List[str])
def list_categories(provider: ContentProvider = Depends(deps.get_content_provider)):
    """Get every category slug used by a post, sorted."""
    try:
        return provider.list_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/categories/{category}", response_model=CategoryPage)
def get_category(
    category: str,
    provider: ContentProvider = Depends(deps.get_content_provider),
):
    """Get the posts filed under one category."""
    try:
        posts = provider.list_posts()
    except Exception as e:
        logger.error(f"Unexpected error listing posts for {category}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    if category not in provider.list_categories(posts):
        raise HTTPException(status_code=404, detail="Category not found")

    return CategoryPage(
        category=category,
        posts=[p for p in posts if category in p.categories],
    )

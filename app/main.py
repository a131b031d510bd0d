import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from app import dependencies as deps
from app.routers import categories, posts
from app.services.providers.factory import build_provider
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Portfolio Content API",
    description="Blog posts and categories normalized from the configured CMS",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Configuration errors surface here and abort startup.
    provider = build_provider(deps.get_settings())
    app.state.provider = provider
    logger.info(f"{provider.name} content provider ready")

    try:
        yield
    finally:
        provider.close()
        logger.info("Content provider closed")


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(categories.router)


@app.get("/")
async def root(provider=Depends(deps.get_content_provider)):
    return {"message": "Portfolio content API is running", "provider": provider.name}

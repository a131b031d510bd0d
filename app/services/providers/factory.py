import logging

from app.errors import ConfigurationError
from app.services.providers.base import ContentProvider
from app.services.providers.contentful import ContentfulConfig, ContentfulProvider
from app.services.providers.filesystem import FilesystemConfig, FilesystemProvider
from app.services.providers.strapi import StrapiConfig, StrapiProvider
from app.settings import Settings

logger = logging.getLogger(__name__)

PROVIDERS = ("filesystem", "strapi", "contentful")


def build_provider(settings: Settings) -> ContentProvider:
    """
    Build the content provider named by CONTENT_PROVIDER.
    Missing required configuration raises ConfigurationError immediately.
    """
    name = (settings.CONTENT_PROVIDER or "").strip().lower()

    if name == "filesystem":
        provider = FilesystemProvider(FilesystemConfig.from_settings(settings))
    elif name == "strapi":
        provider = StrapiProvider(StrapiConfig.from_settings(settings))
    elif name == "contentful":
        provider = ContentfulProvider(ContentfulConfig.from_settings(settings))
    else:
        raise ConfigurationError(
            "CONTENT_PROVIDER",
            f"Unknown CONTENT_PROVIDER {settings.CONTENT_PROVIDER!r}; "
            f"expected one of {', '.join(PROVIDERS)}",
        )

    logger.info(f"Using {provider.name} content provider")
    return provider

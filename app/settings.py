from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Which content source backs the site: filesystem, strapi or contentful
    CONTENT_PROVIDER: str = "filesystem"

    # Filesystem
    POSTS_DIR: str = "posts"
    POSTS_EXTENSION: str = ".md"
    SITE_URL: str = ""

    # Strapi
    STRAPI_URL: str = "http://localhost:1337"
    STRAPI_API_TOKEN: str = ""

    # Contentful
    CONTENTFUL_SPACE_ID: str = ""
    CONTENTFUL_ACCESS_TOKEN: str = ""
    CONTENTFUL_ENVIRONMENT: str = "master"
    CONTENTFUL_BASE_URL: str = "https://cdn.contentful.com"

    # HTTP
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Static build
    BUILD_OUTPUT_DIR: str = "build"

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()

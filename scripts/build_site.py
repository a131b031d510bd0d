import logging
import sys
from pathlib import Path

from app.services.providers.factory import build_provider
from app.services.site_builder import SiteBuilder
from app.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    try:
        with build_provider(settings) as provider:
            report = SiteBuilder(provider, Path(settings.BUILD_OUTPUT_DIR)).build()
    except Exception as e:
        logger.error(f"Site build failed: {e}", exc_info=True)
        return 1

    if report.skipped:
        logger.warning(f"Skipped posts: {', '.join(report.skipped)}")
    logger.info("Site build completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

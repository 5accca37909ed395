"""Main entry point for the Sheetkeeper authority server."""

import sys

import structlog
import uvicorn

from sheetkeeper.config import get_settings
from sheetkeeper.log import configure_logging
from sheetkeeper.server import create_app
from sheetkeeper.sync.local import LocalAuthority

logger = structlog.get_logger(__name__)


def run() -> None:
    """
    Load seed data and serve the authority until interrupted.

    This is the function that should be called from the command line.
    """
    settings = get_settings()
    configure_logging(settings)

    try:
        authority = LocalAuthority.from_files(
            settings.character_file, settings.skills_file, settings.catalog_file
        )
    except Exception as e:
        logger.error("seed_data_load_failed", error=str(e), exc_info=True)
        sys.exit(1)

    app = create_app(authority, settings)
    logger.info("sheetkeeper_starting", host=settings.host, port=settings.port)

    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("server_stopped_by_user")


if __name__ == "__main__":
    run()

"""
Server entry point.

Run with: ``python -m src.main``

Configures logging, refuses to start when required settings are missing,
then hands the application to uvicorn.
"""

import logging
import sys

import uvicorn

from src.core.config import check_required_settings, get_settings
from src.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        check_required_settings(settings)
    except ConfigurationError as exc:
        logger.critical("%s", exc.detail)
        return 1

    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(
        "src.api.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

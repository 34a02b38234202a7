"""
Notes API - Process Entry Point
===============================

Usage:
    notes-api                  # console script
    python -m notes_api
    PORT=8080 notes-api

Settings are resolved once here and passed to the bootstrap procedure.
A bootstrap failure is not caught: it escapes asyncio.run() and the
interpreter exits with a non-zero status.
"""

import asyncio
import logging
from typing import Optional

from notes_api.bootstrap import bootstrap
from notes_api.config import Settings
from notes_api.factory import setup_logging

logger = logging.getLogger(__name__)


async def main(settings: Optional[Settings] = None) -> None:
    """Bootstrap the service and serve until uvicorn receives a stop signal."""
    settings = settings or Settings()
    setup_logging(settings.log_level)

    app = await bootstrap(settings)
    await app.wait_closed()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting.")


if __name__ == "__main__":
    run()

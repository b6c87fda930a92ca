# src/taskchat/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the service (restoring the previous snapshot), runs the
console connector, and always writes the snapshot back on the way out.
"""

from __future__ import annotations

import asyncio
import logging
import signal

from ..cli.bootstrap import close_service, open_service
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from .commands import ConsoleSession

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    service = open_service(settings=settings)
    session = ConsoleSession(service=service, caller=settings.console_user_id, settings=settings)

    console = asyncio.create_task(run_console_loop(session))

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGTERM, console.cancel)
    except NotImplementedError:
        # add_signal_handler is unavailable on some platforms (Windows).
        pass

    try:
        await console
    except asyncio.CancelledError:
        logger.info("Signal received, shutting down...")
    finally:
        close_service(service, settings=settings)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        pass
    logger.info("Bye.")


if __name__ == "__main__":
    main()

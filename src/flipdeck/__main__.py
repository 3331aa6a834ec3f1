"""Main entry point for the bot."""
import asyncio
import logging
import signal
import sys

from flipdeck.app import FlipDeck
from flipdeck.config import ensure_directories
from flipdeck.logging_config import setup_logging
from flipdeck.services.dataset_service import DatasetLoadError

logger = logging.getLogger(__name__)


async def main() -> None:
    """Run the bot until SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_event.set)

    bot = FlipDeck()
    try:
        logger.info("Starting bot...")
        await bot.start()
        await stop_event.wait()
        logger.info("Received exit signal, shutting down...")
    finally:
        logger.info("Cleaning up...")
        await bot.stop()


def run() -> None:
    ensure_directories()
    setup_logging("Starting FlipDeck ...")

    try:
        asyncio.run(main())
    except DatasetLoadError:
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")


if __name__ == "__main__":
    run()

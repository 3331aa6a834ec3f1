"""Main application entry point."""
import logging
from pathlib import Path
from typing import List, Optional

from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from flipdeck.config import settings
from flipdeck.models.base import init_db
from flipdeck.models.card_models import Entry
from flipdeck.monitoring import start_monitoring
from flipdeck.services.dataset_service import DatasetLoadError, load_entries
from flipdeck.bot import (
    handle_start,
    handle_callback,
    handle_message,
    handle_error,
)


class FlipDeck:
    """Main application class."""

    def __init__(self, dataset_file: Optional[Path] = None):
        """Initialize the application."""
        self.dataset_file = dataset_file or settings.paths.dataset_file
        self.entries: List[Entry] = []
        self.application: Optional[Application] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    async def start(self) -> None:
        """Load the dataset, then start answering updates."""
        if self.running:
            return

        try:
            # Nothing is wired up until the dataset is loaded
            self.entries = load_entries(self.dataset_file)
        except DatasetLoadError as e:
            self.logger.error("Failed to load dataset: %s", str(e))
            raise

        try:
            settings.validate()

            init_db()
            self.logger.info("Database initialized")

            if settings.monitoring.port:
                start_monitoring(settings.monitoring.port)
                self.logger.info(f"Metrics exported on port {settings.monitoring.port}")

            self.application = Application.builder().token(settings.bot.token).build()
            self.application.bot_data["entries"] = self.entries
            self.logger.info("Application created")

            self.application.add_handler(CommandHandler("start", handle_start))
            # Callbacks may wait half a flip before editing the card
            self.application.add_handler(CallbackQueryHandler(handle_callback, block=False))
            self.application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
            self.application.add_error_handler(handle_error)
            self.logger.info("Handlers added")

            await self.application.initialize()
            await self.application.start()
            await self.application.updater.start_polling()
            self.logger.info("Application started")

            self.running = True

        except Exception as e:
            self.logger.error("Failed to start application: %s", str(e))
            await self.stop()
            raise

    async def stop(self) -> None:
        """Stop the application."""
        if not self.application:
            return

        try:
            if self.application.updater.running:
                await self.application.updater.stop()
            if self.application.running:
                await self.application.stop()
            await self.application.shutdown()
            self.logger.info("Application stopped")
        finally:
            self.application = None
            self.running = False

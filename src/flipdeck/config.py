"""Configuration settings for the flashcard bot."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
DATASET_FILE = Path(os.getenv("DATASET_FILE", str(DATA_DIR / "example.csv")))
RESOURCE_DIR = os.getenv("RESOURCE_DIR", "res")

# Review settings
DAY_OFFSETS = {"again": 1, "good": 3, "easy": 7}  # days until the next review


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
        Path(RESOURCE_DIR),
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    dataset_file: Path = DATASET_FILE
    resource_dir: str = RESOURCE_DIR


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///flipdeck.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    progress_slot: str = os.getenv("PROGRESS_SLOT", "flashcardProgress")


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class BotSettings:
    """Bot configuration settings."""
    token: str = os.getenv("TELEGRAM_BOT_TOKEN", "")


@dataclass
class CardSettings:
    """Card presentation settings."""
    flip_transition_seconds: float = float(os.getenv("FLIP_TRANSITION_SECONDS", "0.6"))
    entries_per_row: int = int(os.getenv("ENTRIES_PER_ROW", "5"))

    @property
    def content_swap_delay(self) -> float:
        """Delay before swapping card content, half of the flip transition."""
        return self.flip_transition_seconds / 2


@dataclass
class MonitoringSettings:
    """Metrics exporter settings."""
    port: int = int(os.getenv("METRICS_PORT", "0"))


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_bot_settings() -> BotSettings:
    """Get bot settings."""
    return BotSettings()


def get_card_settings() -> CardSettings:
    """Get card settings."""
    return CardSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    bot: BotSettings = field(default_factory=get_bot_settings)
    card: CardSettings = field(default_factory=get_card_settings)
    monitoring: MonitoringSettings = field(default_factory=MonitoringSettings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.bot.token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required")

        if self.card.flip_transition_seconds < 0:
            raise ValueError("FLIP_TRANSITION_SECONDS cannot be negative")

        if self.card.entries_per_row < 1:
            raise ValueError("ENTRIES_PER_ROW must be positive")

        if self.monitoring.port < 0:
            raise ValueError("METRICS_PORT cannot be negative")


# Create global settings instance
settings = Settings()

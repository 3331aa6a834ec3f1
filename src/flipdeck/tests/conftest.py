"""Test configuration."""
import os
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from dotenv import load_dotenv
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.mkdtemp()) / 'flipdeck_test.db'}"
os.environ["FLIP_TRANSITION_SECONDS"] = "0"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from sqlalchemy.orm import Session

from flipdeck.models.base import Base, SessionLocal, engine
from flipdeck.models.card_models import Entry

fake = Faker()


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def make_entry(entry_id: int, **fields) -> Entry:
    """Create an entry with generated text fields."""
    values = {
        "main_word": fake.word(),
        "ipa": f"/{fake.lexify('????')}/",
        "part_of_speech": fake.random_element(["noun", "verb", "adjective"]),
        "group": fake.word(),
        "translation": fake.word(),
        "transliteration": fake.word(),
        "sentence": fake.sentence(),
        "image_url": f"{fake.word()}.png",
        "audio_url": f"{fake.word()}.mp3",
    }
    values.update(fields)
    return Entry(id=entry_id, **values)


@pytest.fixture
def entries() -> List[Entry]:
    """Five entries with identifiers 1 to 5."""
    return [make_entry(entry_id) for entry_id in range(1, 6)]

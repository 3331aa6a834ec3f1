"""Key-value persistence on top of the database."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from flipdeck.models.models import StorageSlot

logger = logging.getLogger(__name__)


class StorageService:
    """Service for reading and writing named storage slots."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def get_item(self, key: str) -> Optional[str]:
        """Get the value stored under a key, or None if the slot is empty."""
        slot = self.db.query(StorageSlot).filter(StorageSlot.key == key).first()
        return slot.value if slot else None

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        slot = self.db.query(StorageSlot).filter(StorageSlot.key == key).first()
        if slot:
            slot.value = value
        else:
            self.db.add(StorageSlot(key=key, value=value))
        self.db.commit()
        logger.debug(f"Stored {len(value)} characters in slot {key}")

    def remove_item(self, key: str) -> bool:
        """Delete a slot. Returns False when nothing was stored."""
        slot = self.db.query(StorageSlot).filter(StorageSlot.key == key).first()
        if not slot:
            return False
        self.db.delete(slot)
        self.db.commit()
        return True

    def close(self) -> None:
        """Release the database connection. The service stays usable."""
        self.db.close()

"""Database models for the bot."""
from sqlalchemy import Column, String, Text

from flipdeck.models.base import Base, TimestampMixin


class StorageSlot(Base, TimestampMixin):
    """A named value in the key-value persistence table."""

    __tablename__ = "storage_slots"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)

"""Tests for the progress store and its storage slot."""
import json
from datetime import date, datetime

import pytest
from sqlalchemy.orm import Session

from flipdeck.models.card_models import Outcome, ProgressRecord
from flipdeck.models.models import StorageSlot
from flipdeck.services.progress_service import UNSEEN, ProgressStore
from flipdeck.services.storage_service import StorageService

SLOT = "flashcardProgress:test"


@pytest.fixture
def storage(db: Session) -> StorageService:
    return StorageService(db)


@pytest.fixture
def store(storage: StorageService) -> ProgressStore:
    return ProgressStore(storage, SLOT)


def test_storage_set_get_remove(storage: StorageService) -> None:
    """Slots hold one value each and can be replaced or removed."""
    assert storage.get_item("a") is None
    storage.set_item("a", "1")
    storage.set_item("a", "2")
    storage.set_item("b", "3")
    assert storage.get_item("a") == "2"
    assert storage.get_item("b") == "3"
    assert storage.remove_item("a") is True
    assert storage.remove_item("a") is False
    assert storage.get_item("a") is None


def test_load_empty(store: ProgressStore) -> None:
    """A never-initialized slot is an empty store, not an error."""
    assert store.load() == {}
    assert store.records == {}


def test_record_outcome_writes_through(store: ProgressStore, db: Session) -> None:
    """Every grading is persisted immediately."""
    record = store.record_outcome(3, Outcome.GOOD, datetime(2024, 1, 1, 15, 30))

    assert record == ProgressRecord(Outcome.GOOD, date(2024, 1, 4))
    slot = db.query(StorageSlot).filter(StorageSlot.key == SLOT).first()
    assert json.loads(slot.value) == {"3": {"lastResult": "Good", "dueDate": "2024-01-04"}}


def test_regrading_keeps_only_latest(store: ProgressStore, storage: StorageService) -> None:
    """A second grading replaces the first; no history is kept."""
    day = datetime(2024, 1, 1, 10, 0)
    store.record_outcome(3, Outcome.EASY, day)
    assert store.lookup(3).due_date == date(2024, 1, 8)

    store.record_outcome(3, "again", day)

    assert store.lookup(3) == ProgressRecord(Outcome.AGAIN, date(2024, 1, 2))
    assert json.loads(storage.get_item(SLOT)) == {"3": {"lastResult": "Again", "dueDate": "2024-01-02"}}


def test_lookup_unseen(store: ProgressStore) -> None:
    assert store.lookup(42) is None
    assert store.status(42) == UNSEEN == "Unseen"


def test_status_uses_label(store: ProgressStore) -> None:
    store.record_outcome("7", Outcome.EASY, datetime(2024, 1, 1))
    assert store.status(7) == "Easy"


def test_round_trip(store: ProgressStore, storage: StorageService) -> None:
    """A new store over the same slot sees the same records."""
    now = datetime(2024, 5, 20, 9)
    store.record_outcome(1, Outcome.AGAIN, now)
    store.record_outcome(2, Outcome.GOOD, now)
    store.record_outcome(10, Outcome.EASY, now)

    reloaded = ProgressStore(storage, SLOT)
    assert reloaded.load() == store.records
    assert reloaded.status(10) == "Easy"


def test_slots_are_isolated(storage: StorageService) -> None:
    first = ProgressStore(storage, "flashcardProgress:1")
    second = ProgressStore(storage, "flashcardProgress:2")
    first.record_outcome(1, Outcome.GOOD, datetime(2024, 1, 1))
    assert second.lookup(1) is None


@pytest.mark.parametrize("raw", [
    "{not json",
    "[1, 2, 3]",
    '{"1": {"lastResult": "Hard", "dueDate": "2024-01-01"}}',
    '{"1": {"lastResult": "Good"}}',
    '{"1": {"lastResult": "Good", "dueDate": "yesterday"}}',
    '{"1": "Good"}',
])
def test_corrupt_slot_degrades_to_empty(storage: StorageService, raw: str) -> None:
    """Unreadable progress is treated as no progress."""
    storage.set_item(SLOT, raw)
    store = ProgressStore(storage, SLOT)
    assert store.load() == {}
    assert store.status(1) == UNSEEN


def test_corrupt_slot_is_replaced_on_next_write(storage: StorageService) -> None:
    storage.set_item(SLOT, "{not json")
    store = ProgressStore(storage, SLOT)
    store.record_outcome(2, Outcome.GOOD, datetime(2024, 1, 1))
    assert json.loads(storage.get_item(SLOT)) == {"2": {"lastResult": "Good", "dueDate": "2024-01-04"}}


def test_due_entries(store: ProgressStore) -> None:
    store.record_outcome(1, Outcome.AGAIN, datetime(2024, 1, 1))
    store.record_outcome(2, Outcome.EASY, datetime(2024, 1, 1))
    assert store.due_entries([1, 2, 3], today=date(2024, 1, 2)) == ["1"]
    assert store.due_entries([1, 2, 3], today=date(2024, 1, 8)) == ["1", "2"]


def test_reset(store: ProgressStore, storage: StorageService) -> None:
    store.record_outcome(1, Outcome.GOOD, datetime(2024, 1, 1))
    store.reset()
    assert store.lookup(1) is None
    assert storage.get_item(SLOT) is None
    assert ProgressStore(storage, SLOT).load() == {}

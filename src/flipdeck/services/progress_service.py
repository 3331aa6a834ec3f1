"""Persisted review progress keyed by entry identifier."""
import json
import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from flipdeck.models.card_models import Outcome, ProgressRecord
from flipdeck.monitoring import progress_load_failures, progress_writes
from flipdeck.services.review_scheduler import compute_due_date, format_due_date
from flipdeck.services.storage_service import StorageService

logger = logging.getLogger(__name__)

UNSEEN = "Unseen"


class ProgressStore:
    """Latest review outcome per entry, stored as one JSON object in one slot.

    The mapping is loaded lazily on first use and written back in full after
    every mutation. Only the latest outcome of an entry is kept.
    """

    def __init__(self, storage: StorageService, slot: str):
        """Initialize the store with a storage service and a slot name."""
        self.storage = storage
        self.slot = slot
        self._records: Optional[Dict[str, ProgressRecord]] = None

    @property
    def records(self) -> Dict[str, ProgressRecord]:
        if self._records is None:
            self._records = self.load()
        return self._records

    def load(self) -> Dict[str, ProgressRecord]:
        """Read the whole store. Missing or unreadable data yields an empty mapping."""
        raw = self.storage.get_item(self.slot)
        if raw is None:
            logger.debug(f"No progress stored in slot {self.slot}")
            return {}

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            records = {str(key): ProgressRecord.from_dict(value) for key, value in data.items()}
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable progress in slot {self.slot}: {e}")
            progress_load_failures.inc()
            return {}

        logger.info(f"Loaded progress for {len(records)} entries from slot {self.slot}")
        return records

    def save(self) -> None:
        """Write the whole mapping to the slot."""
        payload = {key: record.to_dict() for key, record in self.records.items()}
        self.storage.set_item(self.slot, json.dumps(payload, ensure_ascii=False))
        progress_writes.inc()

    def record_outcome(self, entry_id: int | str, outcome: Outcome | str,
                       now: Optional[datetime] = None) -> ProgressRecord:
        """Overwrite the entry's record with a new outcome and persist immediately."""
        outcome = Outcome.parse(outcome)
        record = ProgressRecord(last_result=outcome, due_date=compute_due_date(outcome, now))
        self.records[str(entry_id)] = record
        self.save()
        logger.info(f"Entry {entry_id} graded {outcome.label}, due {format_due_date(record.due_date)}")
        return record

    def lookup(self, entry_id: int | str) -> Optional[ProgressRecord]:
        """Get the entry's record, or None if it was never graded."""
        return self.records.get(str(entry_id))

    def status(self, entry_id: int | str) -> str:
        """Display status of an entry: its last result or "Unseen"."""
        record = self.lookup(entry_id)
        return record.last_result.label if record else UNSEEN

    def due_entries(self, entry_ids: Iterable[int | str], today: Optional[date] = None) -> List[str]:
        """Identifiers among `entry_ids` whose due date is today or earlier."""
        if today is None:
            today = date.today()
        due = []
        for entry_id in entry_ids:
            record = self.lookup(entry_id)
            if record and record.due_date <= today:
                due.append(str(entry_id))
        return due

    def reset(self) -> None:
        """Forget all progress. An empty slot loads as an empty store."""
        self._records = {}
        self.storage.remove_item(self.slot)
        progress_writes.inc()
        logger.info(f"Progress in slot {self.slot} reset")

    def close(self) -> None:
        self.storage.close()

"""Review session: the state behind one open flashcard view."""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from flipdeck.models.card_models import (
    BackFace,
    CardSide,
    Entry,
    EntryRow,
    FrontFace,
    Outcome,
    ProgressRecord,
)
from flipdeck.monitoring import card_flips, card_navigations, cards_graded
from flipdeck.services.color_service import color_key, stripe_color
from flipdeck.services.dataset_service import resolve_resource_url
from flipdeck.services.navigation import NavigationCursor
from flipdeck.services.progress_service import ProgressStore

logger = logging.getLogger(__name__)


class ReviewSession:
    """Owns the entry sequence, the cursor, the visible side and the progress store.

    Every navigation turns the card back to its front side.
    """

    def __init__(
        self,
        entries: Sequence[Entry],
        progress: ProgressStore,
        resource_dir: str = "res",
        start_index: int = 0,
    ):
        self.entries = tuple(entries)
        self.progress = progress
        self.resource_dir = resource_dir
        self.cursor = NavigationCursor(len(self.entries), start_index)
        self.side = CardSide.FRONT
        self.entries_visible = False

    @property
    def index(self) -> int:
        return self.cursor.index

    @property
    def current_entry(self) -> Entry:
        return self.entries[self.cursor.index]

    def previous(self) -> Entry:
        """Go to the previous entry, wrapping to the last one."""
        self.cursor.retreat()
        card_navigations.labels(direction="back").inc()
        return self._show_front()

    def skip(self) -> Entry:
        """Go to the next entry without grading, wrapping to the first one."""
        self.cursor.advance()
        card_navigations.labels(direction="skip").inc()
        return self._show_front()

    def jump_to(self, index: int) -> Entry:
        self.cursor.jump_to(index)
        card_navigations.labels(direction="jump").inc()
        return self._show_front()

    def grade(self, outcome: Outcome | str, now: Optional[datetime] = None) -> ProgressRecord:
        """Record an outcome for the current entry, then move to the next one."""
        outcome = Outcome.parse(outcome)
        record = self.progress.record_outcome(self.current_entry.id, outcome, now)
        cards_graded.labels(outcome=outcome.value).inc()
        self.cursor.advance()
        self._show_front()
        return record

    def flip(self) -> CardSide:
        self.side = CardSide.BACK if self.side == CardSide.FRONT else CardSide.FRONT
        card_flips.inc()
        return self.side

    def toggle_entries(self) -> bool:
        self.entries_visible = not self.entries_visible
        return self.entries_visible

    def reset_progress(self) -> None:
        self.progress.reset()

    def close(self) -> None:
        """Release the progress store's database connection."""
        self.progress.close()

    def status(self, entry: Entry) -> str:
        return self.progress.status(entry.id)

    def entry_rows(self) -> List[EntryRow]:
        """One row per entry with its status; the current entry is highlighted."""
        rows = []
        for index, entry in enumerate(self.entries):
            record = self.progress.lookup(entry.id)
            rows.append(EntryRow(
                index=index,
                entry_id=entry.id,
                main_word=entry.main_word,
                status=self.progress.status(entry.id),
                due_date=record.due_date.isoformat() if record else "",
                highlighted=index == self.cursor.index,
            ))
        return rows

    def front(self) -> FrontFace:
        entry = self.current_entry
        return FrontFace(
            main_word=entry.main_word,
            image_url=resolve_resource_url(entry.image_url, self.resource_dir),
            stripe_color=stripe_color(color_key(entry.main_word)),
        )

    def back(self) -> BackFace:
        entry = self.current_entry
        return BackFace(
            entry_id=entry.id,
            main_word=entry.main_word,
            ipa=entry.ipa,
            part_of_speech=entry.part_of_speech,
            group=entry.group,
            translation=entry.translation,
            transliteration=entry.transliteration,
            sentence=entry.sentence,
            audio_url=resolve_resource_url(entry.audio_url, self.resource_dir),
            stripe_color=stripe_color(color_key(entry.main_word)),
            status=self.status(entry),
        )

    def _show_front(self) -> Entry:
        self.side = CardSide.FRONT
        logger.debug(f"Showing entry {self.current_entry.id} at index {self.cursor.index}")
        return self.current_entry

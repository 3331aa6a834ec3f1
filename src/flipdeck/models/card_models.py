"""Models for flashcard entries and review progress."""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict


class Outcome(Enum):
    """Self-assessed recall quality for an entry."""
    AGAIN = "again"
    GOOD = "good"
    EASY = "easy"

    @property
    def label(self) -> str:
        """Display label, e.g. "Good"."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "Outcome | str") -> "Outcome":
        """Accept an Outcome, its value or its label (any case)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown review outcome: {value!r}") from None


class CardSide(Enum):
    """Visible face of the card."""
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class Entry:
    """One vocabulary item from the dataset."""
    id: int
    main_word: str
    ipa: str = ""
    part_of_speech: str = ""
    group: str = ""
    translation: str = ""
    transliteration: str = ""
    sentence: str = ""
    image_url: str = ""
    audio_url: str = ""


@dataclass(frozen=True)
class ProgressRecord:
    """Latest review outcome of an entry and its next due date."""
    last_result: Outcome
    due_date: date

    def to_dict(self) -> Dict[str, str]:
        return {
            "lastResult": self.last_result.label,
            "dueDate": self.due_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressRecord":
        """Build a record from its stored form; raises ValueError/KeyError on bad data."""
        return cls(
            last_result=Outcome.parse(data["lastResult"]),
            due_date=date.fromisoformat(data["dueDate"]),
        )


@dataclass(frozen=True)
class EntryRow:
    """One line of the entry list."""
    index: int
    entry_id: int
    main_word: str
    status: str
    due_date: str
    highlighted: bool


@dataclass(frozen=True)
class FrontFace:
    """Fields shown on the front of the card."""
    main_word: str
    image_url: str
    stripe_color: str


@dataclass(frozen=True)
class BackFace:
    """Fields shown on the back of the card."""
    entry_id: int
    main_word: str
    ipa: str
    part_of_speech: str
    group: str
    translation: str
    transliteration: str
    sentence: str
    audio_url: str
    stripe_color: str
    status: str

"""Service for loading the flashcard dataset."""
import csv
import io
import logging
from pathlib import Path
from typing import Dict, List

from flipdeck.models.card_models import Entry
from flipdeck.monitoring import dataset_entries, dataset_load_failures

logger = logging.getLogger(__name__)

# Entry field -> dataset column header
COLUMN_NAMES: Dict[str, str] = {
    "id": "ID",
    "main_word": "Main Word",
    "ipa": "IPA",
    "part_of_speech": "Part Of Speech",
    "group": "Group",
    "translation": "Chinese Translation",
    "transliteration": "Chinese Transliteration",
    "sentence": "Sentence",
    "image_url": "Image URL",
    "audio_url": "Audio URL",
}


class DatasetLoadError(Exception):
    """The dataset could not be read or parsed."""


def _text(row: Dict[str, str], field_name: str) -> str:
    value = row.get(COLUMN_NAMES[field_name])
    return value.strip() if value else ""


def parse_entry(row: Dict[str, str]) -> Entry:
    """Build an Entry from a CSV row. The identifier must be an integer."""
    raw_id = _text(row, "id")
    try:
        entry_id = int(raw_id)
    except ValueError:
        raise DatasetLoadError(f"Invalid entry identifier: {raw_id!r}") from None

    return Entry(
        id=entry_id,
        **{name: _text(row, name) for name in COLUMN_NAMES if name != "id"},
    )


def parse_entries(text: str) -> List[Entry]:
    """Parse CSV text with a header row into entries sorted by identifier."""
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames or COLUMN_NAMES["id"] not in reader.fieldnames:
        raise DatasetLoadError(f"Dataset has no {COLUMN_NAMES['id']!r} column")

    entries = [parse_entry(row) for row in reader]
    ids = [entry.id for entry in entries]
    if len(set(ids)) != len(ids):
        raise DatasetLoadError("Dataset contains duplicate entry identifiers")

    return sorted(entries, key=lambda entry: entry.id)


def load_entries(path: Path | str) -> List[Entry]:
    """Load the dataset file. Any failure is fatal and raised as DatasetLoadError."""
    path = Path(path)
    logger.info(f"Loading dataset from {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        dataset_load_failures.inc()
        raise DatasetLoadError(f"Could not read dataset {path}: {e}") from e

    try:
        entries = parse_entries(text)
    except csv.Error as e:
        dataset_load_failures.inc()
        raise DatasetLoadError(f"Could not parse dataset {path}: {e}") from e
    except DatasetLoadError:
        dataset_load_failures.inc()
        raise

    if not entries:
        dataset_load_failures.inc()
        raise DatasetLoadError(f"Dataset {path} has no entries")

    dataset_entries.set(len(entries))
    logger.info(f"Loaded {len(entries)} entries")
    return entries


def resolve_resource_url(value: str, resource_dir: str) -> str:
    """Resolve an image or audio reference.

    References containing a path separator are used as-is; bare file names
    live in `resource_dir`. An empty reference means no resource.
    """
    if not value:
        return ""
    if "/" in value:
        return value
    return f"{resource_dir.rstrip('/')}/{value}"

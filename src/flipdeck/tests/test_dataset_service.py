"""Tests for dataset loading."""
from pathlib import Path

import pytest

from flipdeck.models.card_models import Entry
from flipdeck.services.dataset_service import (
    DatasetLoadError,
    load_entries,
    parse_entries,
    resolve_resource_url,
)

HEADER = (
    "ID,Main Word,IPA,Part Of Speech,Group,Chinese Translation,"
    "Chinese Transliteration,Sentence,Image URL,Audio URL\n"
)


def test_parse_types_and_order() -> None:
    """Identifiers are integers, everything else is text, rows sorted by id."""
    text = HEADER + (
        "10,red,/rɛd/,adjective,basic,红色,hóng sè,\"A red, red rose.\",red.png,red.mp3\n"
        "2,blue,/bluː/,adjective,basic,蓝色,lán sè,The sky is blue.,img/blue.png,\n"
        "1,007,,noun,,,,,,\n"
    )
    entries = parse_entries(text)

    assert [entry.id for entry in entries] == [1, 2, 10]
    assert entries[0] == Entry(id=1, main_word="007", part_of_speech="noun")
    assert entries[2].sentence == "A red, red rose."
    assert entries[1].image_url == "img/blue.png"
    assert entries[1].audio_url == ""


def test_missing_columns_are_empty() -> None:
    entries = parse_entries("ID,Main Word\n1,apple\n")
    assert entries == [Entry(id=1, main_word="apple")]


def test_no_id_column() -> None:
    with pytest.raises(DatasetLoadError):
        parse_entries("Main Word\napple\n")


def test_bad_identifier() -> None:
    with pytest.raises(DatasetLoadError):
        parse_entries(HEADER + "one,apple,,,,,,,,\n")


def test_duplicate_identifier() -> None:
    with pytest.raises(DatasetLoadError):
        parse_entries("ID,Main Word\n1,apple\n1,pear\n")


def test_load_entries(tmp_path: Path) -> None:
    path = tmp_path / "cards.csv"
    path.write_text("\ufeff" + HEADER + "2,b,,,,,,,,\n1,a,,,,,,,,\n", encoding="utf-8")
    assert [entry.main_word for entry in load_entries(path)] == ["a", "b"]


def test_load_missing_file(tmp_path: Path) -> None:
    """A dataset that cannot be read is fatal."""
    with pytest.raises(DatasetLoadError):
        load_entries(tmp_path / "missing.csv")


def test_load_invalid_utf8(tmp_path: Path) -> None:
    """Undecodable bytes are a load failure like any other."""
    path = tmp_path / "cards.csv"
    path.write_bytes(b"ID,Main Word\n1,\xff\xfe\xfa\n")
    with pytest.raises(DatasetLoadError):
        load_entries(path)


def test_load_empty_dataset(tmp_path: Path) -> None:
    path = tmp_path / "cards.csv"
    path.write_text(HEADER, encoding="utf-8")
    with pytest.raises(DatasetLoadError):
        load_entries(path)


def test_bundled_example_dataset() -> None:
    """The sample dataset shipped with the project loads."""
    path = Path(__file__).parents[3] / "data" / "example.csv"
    entries = load_entries(path)
    assert entries[0].id == 1
    assert [entry.id for entry in entries] == sorted(entry.id for entry in entries)


@pytest.mark.parametrize("value, expected", [
    ("", ""),
    ("apple.png", "res/apple.png"),
    ("img/apple.png", "img/apple.png"),
    ("https://example.com/apple.png", "https://example.com/apple.png"),
])
def test_resolve_resource_url(value: str, expected: str) -> None:
    assert resolve_resource_url(value, "res") == expected


def test_resolve_with_trailing_slash() -> None:
    assert resolve_resource_url("a.mp3", "media/") == "media/a.mp3"

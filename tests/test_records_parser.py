import pytest

from zh_parking.exceptions import DescriptionFormatError
from zh_parking.models import FeedItem, ParkingRecord
from zh_parking.records_parser import extract, extract_all, parse_spaces


def _item(description, title="Parkhaus Accu"):
    return FeedItem(
        title=title,
        link="https://www.pls-zh.ch/parkhaus/accu.jsp",
        description=description,
        pub_date="Sat, 17 Oct 2026 14:55:03 +0200",
    )


def test_extract_valid():
    record = extract(_item("Open / 42"))
    assert record == ParkingRecord(
        name="Parkhaus Accu",
        url="https://www.pls-zh.ch/parkhaus/accu.jsp",
        status="Open",
        spaces_left=42,
    )


@pytest.mark.parametrize("description", ["Open", "", "open/42", "open /42"])
def test_extract_missing_delimiter(description):
    with pytest.raises(DescriptionFormatError, match="Expected '/' in description"):
        extract(_item(description))


@pytest.mark.parametrize("description, expected", [
    ("Open / abc", 0),
    ("closed / ???", 0),
    ("open / ", 0),
    ("open / 42 frei", 42),
    ("open /  7", 7),
    ("open / -3", 0),
    ("open / +15", 15),
])
def test_extract_count_defaults(description, expected):
    assert extract(_item(description)).spaces_left == expected


def test_extract_keeps_status_verbatim():
    assert extract(_item("Besetzt  / 0")).status == "Besetzt "


def test_extract_uses_second_part_only():
    record = extract(_item("open / 12 / 99"))
    assert record.status == "open"
    assert record.spaces_left == 12


@pytest.mark.parametrize("text, expected", [
    ("0", 0),
    ("123", 123),
    ("  9", 9),
    ("x9", 0),
    ("", 0),
])
def test_parse_spaces(text, expected):
    assert parse_spaces(text) == expected


def test_extract_all_skips_malformed(caplog):
    items = [
        _item("open / 5", title="A"),
        _item("open", title="Broken"),
        _item("closed / abc", title="B"),
    ]
    records = extract_all(items)
    assert [(r.name, r.spaces_left) for r in records] == [("A", 5), ("B", 0)]
    assert "Skipping item 'Broken'" in caplog.text


def test_extract_all_unicode_titles():
    records = extract_all([_item("open / 3", title="Parkhaus Zürich West"), _item("open / 1", title="Hohe Promenade ✓")])
    assert [r.name for r in records] == ["Parkhaus Zürich West", "Hohe Promenade ✓"]


def test_extract_all_empty():
    assert extract_all([]) == []

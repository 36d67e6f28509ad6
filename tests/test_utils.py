"""Tests for identifier and timestamp helpers."""

from datetime import datetime, timedelta, timezone

from notetree import utils


def test_date_str_is_fixed_width() -> None:
    early = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    late = datetime(2024, 11, 12, 13, 14, 15, 678000, tzinfo=timezone.utc)

    assert utils.date_str(early) == "2024-01-02T03:04:05.000Z"
    assert utils.date_str(late) == "2024-11-12T13:14:15.678Z"


def test_date_str_converts_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    local = datetime(2024, 1, 1, 1, 0, 0, tzinfo=plus_two)

    assert utils.date_str(local) == "2023-12-31T23:00:00.000Z"


def test_string_order_matches_time_order() -> None:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    dates = [base + timedelta(milliseconds=ms) for ms in [0, 9, 10, 999, 1000, 86_400_000]]

    formatted = [utils.date_str(date) for date in dates]

    assert formatted == sorted(formatted)


def test_parse_date_time() -> None:
    parsed = utils.parse_date_time("2024-11-12T13:14:15.678Z")

    assert parsed == datetime(2024, 11, 12, 13, 14, 15, 678000, tzinfo=timezone.utc)


def test_new_ids_are_alphanumeric() -> None:
    ids = {utils.new_note_id() for _ in range(50)}

    assert len(ids) == 50, "IDs should be unique"
    assert all(len(i) == 12 and i.isalnum() for i in ids)

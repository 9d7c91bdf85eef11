from datetime import datetime

import pytest

from app.services.row_validator import NormalizedRow, RawRow, Rejected, sanitize, validate_row

GOOD_TS = "2024-05-01 20:50:00"


def test_valid_row_is_normalized():
    row = validate_row(RawRow(name="  Ana Souza ", score=" 85.5 ", timestamp=GOOD_TS))

    assert isinstance(row, NormalizedRow)
    assert row.name == "Ana Souza"
    assert row.score == 85.5
    assert row.submitted_at == datetime(2024, 5, 1, 20, 50, 0)
    assert row.timestamp == GOOD_TS


def test_markup_is_stripped_from_every_cell():
    row = validate_row(RawRow(name="<b>O'Brien</b>", score='"70"', timestamp=f"`{GOOD_TS}`"))

    assert isinstance(row, NormalizedRow)
    assert row.name == "bOBrien/b"
    assert row.score == 70.0
    assert row.timestamp == GOOD_TS


@pytest.mark.parametrize("value,expected", [(None, ""), ("  x  ", "x"), ("a <", "a"), (42, "")])
def test_sanitize(value, expected):
    assert sanitize(value) == expected


@pytest.mark.parametrize("name", [None, "", "   ", "<>", "'\"`"])
def test_missing_name_is_rejected(name):
    r = validate_row(RawRow(name=name, score="80", timestamp=GOOD_TS))
    assert r == Rejected("missing name")


@pytest.mark.parametrize("score", ["0", "100", "100.0", "0.5", ".5", "1e1"])
def test_scores_in_range_are_accepted(score):
    r = validate_row(RawRow(name="Ana", score=score, timestamp=GOOD_TS))
    assert isinstance(r, NormalizedRow)


@pytest.mark.parametrize("score", [None, "", "abc", "80abc", "7,5", "101", "100.01", "-1", "1e3", "nan", "inf", "1_0"])
def test_bad_scores_are_rejected_not_clamped(score):
    r = validate_row(RawRow(name="Ana", score=score, timestamp=GOOD_TS))
    assert r == Rejected("invalid score")


@pytest.mark.parametrize(
    "ts",
    [
        None,
        "",
        "05/01/2024 20:00",  # wrong shape
        "2024-05-01T20:50:00",
        "2024-05-01  20:50:00",
        "2024-05-01 20:50",
        "24-05-01 20:50:00",
        "2024-13-01 10:00:00",  # month 13
        "2024-05-01 10:61:00",  # minute 61
        "2024-05-01 24:00:00",
        "2023-02-29 10:00:00",  # not a leap year
    ],
)
def test_bad_timestamps_are_rejected(ts):
    r = validate_row(RawRow(name="Ana", score="80", timestamp=ts))
    assert r == Rejected("invalid timestamp")


def test_leap_day_is_valid():
    r = validate_row(RawRow(name="Ana", score="80", timestamp="2024-02-29 23:59:59"))
    assert isinstance(r, NormalizedRow)

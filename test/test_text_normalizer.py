from datetime import date

import pytest

from lifecapture.models import EventData
from normalization.text_normalizer import (
    normalize_date,
    normalize_event_dates,
    normalize_time,
    sanitize_host,
)


def test_normalized_date_is_idempotent(today):
    for value in ["2026-03-05", "2026-12-31", "2030-01-02", "2036-07-04"]:
        once = normalize_date(value, today)
        assert once == value
        assert normalize_date(once, today) == once


def test_past_year_replaced_with_current_year(today):
    assert normalize_date("2019-03-05", today) == "2026-03-05"
    assert normalize_date("2019/3/5", today) == "2026-03-05"


def test_far_future_year_replaced(today):
    assert normalize_date("2037-03-05", today) == "2026-03-05"


def test_mm_dd_expansion(today):
    assert normalize_date("03-05", today) == "2026-03-05"
    assert normalize_date("3/5", today) == "2026-03-05"


def test_month_name_expansion(today):
    assert normalize_date("Jan 15", today) == "2026-01-15"
    assert normalize_date("Saturday, September 7", today) == "2026-09-07"


def test_generic_parse_keeps_reasonable_year(today):
    assert normalize_date("11.05.2027", today) == "2027-11-05"


def test_generic_parse_replaces_old_year(today):
    assert normalize_date("11.05.2018", today).startswith("2026-")


@pytest.mark.parametrize("value", ["Friday", "Sat", "8pm", "Mar", "18"])
def test_partial_date_is_not_completed_from_defaults(today, value):
    assert normalize_date(value, today) == value


def test_unparseable_date_returned_trimmed(today):
    assert normalize_date("  sometime soon  ", today) == "sometime soon"


def test_empty_date_passthrough(today):
    assert normalize_date("", today) == ""
    assert normalize_date(None, today) is None


def test_year_boundary_uses_injected_today():
    assert normalize_date("03-05", date(2031, 1, 1)) == "2031-03-05"
    assert normalize_date("2026-03-05", date(2031, 1, 1)) == "2031-03-05"


def test_normalize_time():
    assert normalize_time("18:30") == "18:30"
    assert normalize_time("6:30 PM") == "18:30"
    assert normalize_time("7pm") == "19:00"
    assert normalize_time("12:15 a.m.") == "00:15"
    assert normalize_time("9:05:00") == "09:05"
    assert normalize_time("doors at dusk") == "doors at dusk"


def test_normalize_event_dates_defaults_end_date(today):
    event = EventData(title="Tech Talk", date="03-05", time="6:30 pm")
    out = normalize_event_dates(event, today)
    assert out.date == "2026-03-05"
    assert out.end_date == "2026-03-05"
    assert out.time == "18:30"
    assert event.date == "03-05"


def test_normalize_event_dates_keeps_explicit_end(today):
    event = EventData(title="Fest", date="Jun 1", time="10:00", end_date="Jun 3", end_time="22:00")
    out = normalize_event_dates(event, today)
    assert (out.date, out.end_date, out.end_time) == ("2026-06-01", "2026-06-03", "22:00")


def test_sanitize_host():
    assert sanitize_host(" - :  Acme   Club ") == "Acme Club"
    assert len(sanitize_host("x" * 300)) == 120
    assert sanitize_host(None) == ""

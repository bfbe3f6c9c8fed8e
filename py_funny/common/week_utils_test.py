"""Tests for the week_utils module."""

import datetime

import pytest
from common import week_utils


def _utc(*args) -> datetime.datetime:
  return datetime.datetime(*args, tzinfo=datetime.timezone.utc)


def test_current_week_id_formats_iso_year_and_padded_week():
  assert week_utils.current_week_id(_utc(2026, 1, 21, 15)) == "2026-W04"


def test_current_week_id_uses_eastern_time():
  # Monday 03:00 UTC is still Sunday evening in New York.
  now = _utc(2026, 1, 19, 3)
  assert now.isocalendar()[1] == 4
  assert week_utils.current_week_id(now) == "2026-W03"


def test_current_week_id_uses_iso_year_at_year_boundary():
  # Dec 29, 2025 is the Monday of ISO week 1 of 2026.
  assert week_utils.current_week_id(_utc(2025, 12, 30, 17)) == "2026-W01"
  # Jan 1, 2027 is a Friday in the 53rd ISO week of 2026.
  assert week_utils.current_week_id(_utc(2027, 1, 1, 17)) == "2026-W53"


def test_current_week_id_treats_naive_datetime_as_utc():
  naive = datetime.datetime(2026, 1, 19, 3)
  assert week_utils.current_week_id(naive) == "2026-W03"


def test_current_week_id_defaults_to_now():
  expected = week_utils.week_id_for(
    datetime.datetime.now(datetime.timezone.utc))
  assert week_utils.current_week_id() == expected


def test_parse_week_id():
  assert week_utils.parse_week_id("2026-W04") == (2026, 4)
  assert week_utils.parse_week_id(" 2026-W53 ") == (2026, 53)


@pytest.mark.parametrize("week_id", [
  "",
  "2026-4",
  "2026-W4",
  "2026W04",
  "26-W04",
  "2026-W00",
  "2025-W53",
  "2026-W54",
  "２０２６-W０４",
  "2026-W٤",
])
def test_parse_week_id_rejects_invalid(week_id):
  with pytest.raises(ValueError, match="Invalid week id"):
    week_utils.parse_week_id(week_id)


def test_week_date_range_2026_w04():
  week_start, week_end = week_utils.week_date_range("2026-W04")

  tz = week_utils.RANKINGS_TIMEZONE
  assert week_start == datetime.datetime(2026, 1, 19, tzinfo=tz)
  assert week_end == datetime.datetime(2026, 1, 25, 23, 59, 59, 999000,
                                       tzinfo=tz)

  # Cross-check against the standard library's ISO calendar.
  assert week_start.date().isocalendar() == (2026, 4, 1)
  assert week_end.date().isocalendar() == (2026, 4, 7)
  assert week_start.utcoffset() == datetime.timedelta(hours=-5)


def test_week_date_range_week_one_starts_in_previous_year():
  week_start, week_end = week_utils.week_date_range("2026-W01")

  assert week_start.date() == datetime.date(2025, 12, 29)
  assert week_end.date() == datetime.date(2026, 1, 4)


def test_week_date_range_across_dst_change():
  # DST starts Sunday, March 8 2026.
  week_start, week_end = week_utils.week_date_range("2026-W10")

  assert week_start.date() == datetime.date(2026, 3, 2)
  assert week_start.utcoffset() == datetime.timedelta(hours=-5)
  assert week_end.utcoffset() == datetime.timedelta(hours=-4)


def test_week_id_round_trips_through_range():
  week_start, week_end = week_utils.week_date_range("2026-W17")

  assert week_utils.week_id_for(week_start) == "2026-W17"
  assert week_utils.week_id_for(week_end) == "2026-W17"

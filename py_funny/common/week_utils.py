"""ISO week helpers for weekly rankings.

Week IDs look like "2026-W04": the ISO year, then the two-digit ISO week,
both computed in the rankings timezone (America/New_York).
"""

import datetime
import re
import zoneinfo

from common import config

RANKINGS_TIMEZONE = zoneinfo.ZoneInfo(config.RANKINGS_TIMEZONE_NAME)

_WEEK_ID_RE = re.compile(r'^(\d{4})-W(\d{2})$', re.ASCII)


def format_week_id(iso_year: int, iso_week: int) -> str:
  """Format an ISO year and week as a week ID."""
  return f"{iso_year:04d}-W{iso_week:02d}"


def week_id_for(dt: datetime.datetime) -> str:
  """Return the week ID containing `dt`, evaluated in the rankings timezone.

  Naive datetimes are treated as UTC.
  """
  if dt.tzinfo is None:
    dt = dt.replace(tzinfo=datetime.timezone.utc)
  iso_year, iso_week, _ = dt.astimezone(RANKINGS_TIMEZONE).isocalendar()
  return format_week_id(iso_year, iso_week)


def current_week_id(now: datetime.datetime | None = None) -> str:
  """Return the week ID for `now` (defaults to the current time)."""
  if now is None:
    now = datetime.datetime.now(datetime.timezone.utc)
  return week_id_for(now)


def parse_week_id(week_id: str) -> tuple[int, int]:
  """Parse a week ID into (iso_year, iso_week).

  Raises:
      ValueError: If the ID is malformed or names a week the ISO year does
        not have.
  """
  match = _WEEK_ID_RE.match((week_id or '').strip())
  if not match:
    raise ValueError(
      f"Invalid week id '{week_id}', expected format YYYY-Www (e.g. 2026-W04)")

  iso_year, iso_week = int(match.group(1)), int(match.group(2))
  try:
    datetime.date.fromisocalendar(iso_year, iso_week, 1)
  except ValueError as e:
    raise ValueError(f"Invalid week id '{week_id}': {e}") from e
  return iso_year, iso_week


def week_date_range(
    week_id: str) -> tuple[datetime.datetime, datetime.datetime]:
  """Return the (start, end) of a week in the rankings timezone.

  Start is Monday 00:00:00.000 and end is Sunday 23:59:59.999, matching the
  millisecond precision of Firestore timestamps.
  """
  iso_year, iso_week = parse_week_id(week_id)
  monday = datetime.date.fromisocalendar(iso_year, iso_week, 1)
  sunday = monday + datetime.timedelta(days=6)

  week_start = datetime.datetime.combine(monday,
                                         datetime.time.min,
                                         tzinfo=RANKINGS_TIMEZONE)
  week_end = datetime.datetime.combine(sunday,
                                       datetime.time(23, 59, 59, 999000),
                                       tzinfo=RANKINGS_TIMEZONE)
  return week_start, week_end

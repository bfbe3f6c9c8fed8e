"""Models for the Firestore database."""

from __future__ import annotations

import dataclasses
import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from common import config


class RatingPolarity(Enum):
  """Which ranking list a rating counts toward. Stored as string in Firestore."""
  HILARIOUS = "hilarious"
  HORRIBLE = "horrible"

  @staticmethod
  def from_rating(rating: int) -> RatingPolarity | None:
    """Classify a 1-5 rating.

    Args:
        rating: Star rating between MIN_RATING and MAX_RATING
    Returns:
        HILARIOUS for 4-5, HORRIBLE for 1-2, None for the neutral 3
    """
    if rating >= config.HILARIOUS_MIN_RATING:
      return RatingPolarity.HILARIOUS
    if rating <= config.HORRIBLE_MAX_RATING:
      return RatingPolarity.HORRIBLE
    return None


@dataclass(kw_only=True)
class RatingEvent:
  """One device's rating of one joke within one ISO week."""

  key: str | None = None

  joke_id: str | None = None
  rating: Any = None
  device_id: str | None = None
  week_id: str | None = None
  timestamp: datetime.datetime | None = None

  @classmethod
  def from_firestore_dict(cls, data: dict | None, key: str) -> RatingEvent:
    """Create a RatingEvent from a Firestore dictionary.

    Values are taken as stored; validation happens during aggregation so a
    malformed document can be skipped instead of failing the read.
    """
    data = dict(data) if data else {}
    data['key'] = key

    allowed = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in allowed}
    return cls(**filtered)

  @property
  def valid_rating(self) -> int | None:
    """The rating as an int if it is a whole number in range, else None."""
    rating = self.rating
    if isinstance(rating, bool):
      return None
    if isinstance(rating, float) and rating.is_integer():
      rating = int(rating)
    if not isinstance(rating, int):
      return None
    if not config.MIN_RATING <= rating <= config.MAX_RATING:
      return None
    return rating

  def to_dict(self, include_key: bool = False) -> dict:
    """Convert to dictionary for Firestore storage."""
    data = dataclasses.asdict(self)
    if not include_key:
      data.pop('key', None)
    return data


@dataclass(frozen=True)
class RankingEntry:
  """One joke's position within a weekly top list."""

  joke_id: str
  count: int
  rank: int

  def to_dict(self) -> dict[str, Any]:
    """Serialize in the shape stored in the rankings document."""
    return {
      'joke_id': self.joke_id,
      'count': self.count,
      'rank': self.rank,
    }

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> RankingEntry:
    """Create a RankingEntry from a stored map."""
    return cls(
      joke_id=str(data.get('joke_id', '')),
      count=int(data.get('count', 0)),
      rank=int(data.get('rank', 0)),
    )


@dataclass(kw_only=True)
class WeeklyRankings:
  """Top hilarious and horrible jokes for one ISO week."""

  week_id: str
  week_start: datetime.datetime
  week_end: datetime.datetime

  hilarious: list[RankingEntry] = field(default_factory=list)
  horrible: list[RankingEntry] = field(default_factory=list)

  total_hilarious_ratings: int = 0
  total_horrible_ratings: int = 0

  # Set by Firestore on write
  computed_at: datetime.datetime | None = None

  @classmethod
  def from_firestore_dict(cls, data: dict, key: str) -> WeeklyRankings:
    """Create WeeklyRankings from a Firestore dictionary."""
    data = dict(data or {})
    return cls(
      week_id=data.get('week_id') or key,
      week_start=data.get('week_start'),
      week_end=data.get('week_end'),
      hilarious=[
        RankingEntry.from_dict(entry) for entry in data.get('hilarious') or []
      ],
      horrible=[
        RankingEntry.from_dict(entry) for entry in data.get('horrible') or []
      ],
      total_hilarious_ratings=int(data.get('total_hilarious_ratings') or 0),
      total_horrible_ratings=int(data.get('total_horrible_ratings') or 0),
      computed_at=data.get('computed_at'),
    )

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary for Firestore storage.

    `computed_at` is omitted; the storage layer stamps it with the server
    timestamp.
    """
    return {
      'week_id': self.week_id,
      'week_start': self.week_start,
      'week_end': self.week_end,
      'hilarious': [entry.to_dict() for entry in self.hilarious],
      'horrible': [entry.to_dict() for entry in self.horrible],
      'total_hilarious_ratings': self.total_hilarious_ratings,
      'total_horrible_ratings': self.total_horrible_ratings,
    }


@dataclass(kw_only=True)
class AggregationResult:
  """Summary of one aggregation run, for logs and HTTP responses."""

  week_id: str
  events_processed: int = 0
  events_skipped: int = 0
  hilarious_top_count: int = 0
  horrible_top_count: int = 0
  total_hilarious_ratings: int = 0
  total_horrible_ratings: int = 0
  dry_run: bool = False

  def to_dict(self) -> dict[str, Any]:
    """Convert to a JSON-serializable dictionary."""
    return dataclasses.asdict(self)

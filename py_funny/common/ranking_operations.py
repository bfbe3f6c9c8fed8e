"""Weekly rankings aggregation.

Turns one week's rating events into the top hilarious (4-5) and horrible
(1-2) jokes. Ratings of 3 are neutral and ignored.
"""

from __future__ import annotations

import dataclasses
import datetime
from collections import Counter
from collections.abc import Iterable, Mapping

from common import config, models, week_utils
from firebase_functions import logger


@dataclasses.dataclass
class RatingTally:
  """Per-joke counts for each polarity, plus skipped malformed events."""

  hilarious: Counter[str] = dataclasses.field(default_factory=Counter)
  horrible: Counter[str] = dataclasses.field(default_factory=Counter)
  skipped: int = 0

  @property
  def total_hilarious(self) -> int:
    return sum(self.hilarious.values())

  @property
  def total_horrible(self) -> int:
    return sum(self.horrible.values())


def tally_ratings(events: Iterable[models.RatingEvent]) -> RatingTally:
  """Count hilarious and horrible ratings per joke.

  Events with a missing joke ID or a rating that is not a whole number from
  1 to 5 are skipped and counted in `skipped`.
  """
  tally = RatingTally()
  for event in events:
    joke_id = event.joke_id if isinstance(event.joke_id, str) else ''
    rating = event.valid_rating
    if not joke_id.strip() or rating is None:
      logger.warn(f"Skipping malformed rating event {event.key}: "
                  f"joke_id={event.joke_id!r}, rating={event.rating!r}")
      tally.skipped += 1
      continue

    polarity = models.RatingPolarity.from_rating(rating)
    if polarity == models.RatingPolarity.HILARIOUS:
      tally.hilarious[joke_id] += 1
    elif polarity == models.RatingPolarity.HORRIBLE:
      tally.horrible[joke_id] += 1

  return tally


def rank_top_n(counts: Mapping[str, int],
               n: int = config.TOP_N) -> list[models.RankingEntry]:
  """Rank jokes by count, highest first, keeping the top `n`.

  Equal counts are ordered by joke ID ascending so reruns are reproducible.
  """
  if n <= 0:
    return []
  ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
  return [
    models.RankingEntry(joke_id=joke_id, count=count, rank=index + 1)
    for index, (joke_id, count) in enumerate(ordered[:n])
  ]


def build_weekly_rankings(
  week_id: str,
  events: Iterable[models.RatingEvent],
  top_n: int = config.TOP_N,
) -> tuple[models.WeeklyRankings, RatingTally]:
  """Build the rankings document for a week from its rating events."""
  week_start, week_end = week_utils.week_date_range(week_id)
  tally = tally_ratings(events)

  rankings = models.WeeklyRankings(
    week_id=week_id,
    week_start=week_start,
    week_end=week_end,
    hilarious=rank_top_n(tally.hilarious, top_n),
    horrible=rank_top_n(tally.horrible, top_n),
    total_hilarious_ratings=tally.total_hilarious,
    total_horrible_ratings=tally.total_horrible,
  )
  return rankings, tally


def run_aggregation(
  store,
  week_id: str | None = None,
  *,
  now: datetime.datetime | None = None,
  dry_run: bool = False,
) -> models.AggregationResult:
  """Aggregate a week's rating events and save the weekly rankings.

  Args:
      store: Rankings storage exposing `get_rating_events(week_id)` and
        `save_weekly_rankings(rankings)`, e.g. a
        `storage.rankings_firestore.RankingsFirestore`.
      week_id: Week to aggregate. Defaults to the week containing `now`.
      now: Reference time used when `week_id` is omitted.
      dry_run: Compute and log the rankings without writing them.

  Returns:
      Summary of the run.

  Raises:
      ValueError: If `week_id` is not a valid week ID.
  """
  if week_id:
    week_id = week_utils.format_week_id(*week_utils.parse_week_id(week_id))
  else:
    week_id = week_utils.current_week_id(now)
  logger.info(f"Processing week: {week_id}")

  events = store.get_rating_events(week_id)
  logger.info(f"Found {len(events)} rating events")
  if not events:
    logger.warn("No rating events found for this week")

  rankings, tally = build_weekly_rankings(week_id, events)

  logger.info(
    f"Total hilarious ratings (4-5): {rankings.total_hilarious_ratings}")
  logger.info(
    f"Total horrible ratings (1-2): {rankings.total_horrible_ratings}")
  if tally.skipped:
    logger.warn(f"Skipped {tally.skipped} malformed rating events")
  _log_ranked("hilarious", rankings.hilarious)
  _log_ranked("horrible", rankings.horrible)

  if dry_run:
    logger.info(f"[DRY RUN] Would save weekly rankings: {rankings.to_dict()}")
  else:
    store.save_weekly_rankings(rankings)
    logger.info(f"Saved weekly rankings for {week_id}")

  return models.AggregationResult(
    week_id=week_id,
    events_processed=len(events),
    events_skipped=tally.skipped,
    hilarious_top_count=len(rankings.hilarious),
    horrible_top_count=len(rankings.horrible),
    total_hilarious_ratings=rankings.total_hilarious_ratings,
    total_horrible_ratings=rankings.total_horrible_ratings,
    dry_run=dry_run,
  )


def _log_ranked(label: str, entries: list[models.RankingEntry]) -> None:
  lines = [f"Top {len(entries)} {label} jokes:"]
  lines.extend(f"  #{e.rank}: {e.joke_id} ({e.count} votes)" for e in entries)
  logger.info("\n".join(lines))

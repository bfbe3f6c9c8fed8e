"""Aggregate weekly rankings from the command line.

Usage (from py_funny/):
    python -m tools.aggregate_weekly_rankings                   # Current week
    python -m tools.aggregate_weekly_rankings --dry-run         # Don't save
    python -m tools.aggregate_weekly_rankings --week 2026-W04   # Specific week
    python -m tools.aggregate_weekly_rankings --week 2026-W04 --show

Uses Application Default Credentials (GOOGLE_APPLICATION_CREDENTIALS).
"""

from __future__ import annotations

import argparse
import json
import sys

from common import models, ranking_operations
from firebase_functions import logger
from storage import rankings_firestore


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
  parser = argparse.ArgumentParser(
    description="Aggregate rating events into weekly rankings.")
  parser.add_argument("--week",
                      help="Week ID to aggregate, e.g. 2026-W04. "
                      "Defaults to the current week (America/New_York).")
  parser.add_argument("--dry-run",
                      action="store_true",
                      help="Compute rankings without saving them.")
  parser.add_argument("--show",
                      action="store_true",
                      help="Print the stored rankings document afterwards.")
  return parser.parse_args(argv)


def _format_rankings(rankings: models.WeeklyRankings) -> str:
  data = rankings.to_dict()
  data['computed_at'] = rankings.computed_at
  return json.dumps(data, indent=2, default=str)


def main(argv: list[str] | None = None,
         store: rankings_firestore.RankingsFirestore | None = None) -> int:
  """Run the aggregation and return the process exit code."""
  args = _parse_args(argv)

  if store is None:
    # pylint: disable-next=import-outside-toplevel,unused-import
    from common import firebase_init
    store = rankings_firestore.RankingsFirestore()

  if args.dry_run:
    logger.warn("DRY RUN MODE - No changes will be made")

  try:
    result = ranking_operations.run_aggregation(store,
                                                args.week,
                                                dry_run=args.dry_run)
  except Exception as e:  # pylint: disable=broad-except
    logger.error(f"Aggregation failed: {e}")
    return 1

  print(json.dumps(result.to_dict(), indent=2))

  if args.show:
    rankings = store.get_weekly_rankings(result.week_id)
    if rankings is None:
      print(f"No stored rankings for {result.week_id}")
    else:
      print(_format_rankings(rankings))
  return 0


if __name__ == "__main__":
  sys.exit(main())

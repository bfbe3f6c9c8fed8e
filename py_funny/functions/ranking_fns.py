"""Weekly rankings aggregation functions."""

from __future__ import annotations

import traceback

from common import config, ranking_operations, week_utils
from firebase_functions import https_fn, logger, options, scheduler_fn
from functions.function_utils import (error_response, get_bool_param,
                                      get_param, handle_health_check,
                                      success_response)
from storage import rankings_firestore


def _rankings_store() -> rankings_firestore.RankingsFirestore:
  """Build the store used by the aggregation triggers."""
  return rankings_firestore.RankingsFirestore()


@scheduler_fn.on_schedule(
  schedule=config.RANKINGS_SCHEDULE,
  timezone=config.RANKINGS_TIMEZONE_NAME,
  retry_count=config.RANKINGS_RETRY_COUNT,
  memory=options.MemoryOption.MB_256,
)
def aggregate_rankings(event: scheduler_fn.ScheduledEvent) -> None:
  """Aggregate the current week's rankings every day at midnight Eastern."""
  del event
  logger.info("Scheduled aggregation started")
  try:
    result = ranking_operations.run_aggregation(_rankings_store())
  except Exception as e:
    logger.error(f"Scheduled aggregation failed: {e}\n"
                 f"{traceback.format_exc()}")
    # Re-raise so the scheduler retries
    raise
  logger.info(f"Scheduled aggregation complete: {result.to_dict()}")


@https_fn.on_request(
  memory=options.MemoryOption.MB_256,
  timeout_sec=300,
)
def trigger_aggregation(req: https_fn.Request) -> https_fn.Response:
  """Manually aggregate rankings, optionally for a specific week.

  Params:
      week: Week ID such as "2026-W04". Defaults to the current week.
      dry_run: If "true", compute without saving.
  """
  if health_response := handle_health_check(req):
    return health_response

  if req.method not in ['GET', 'POST']:
    return error_response(f'Method not allowed: {req.method}', status=405)

  logger.info(f"Manual aggregation triggered: {req.method} {dict(req.args)}")

  week_param = get_param(req, 'week')
  week_id = None
  if week_param:
    try:
      week_id = week_utils.format_week_id(
        *week_utils.parse_week_id(str(week_param)))
    except ValueError as e:
      return error_response(str(e), error_type='invalid_week_id', status=400)

  try:
    dry_run = get_bool_param(req, 'dry_run')
    result = ranking_operations.run_aggregation(
      _rankings_store(),
      week_id,
      dry_run=dry_run,
    )
  except Exception as e:  # pylint: disable=broad-except
    logger.error(f"Manual aggregation failed: {e}\n{traceback.format_exc()}")
    return error_response(f'Failed to aggregate rankings: {e}')

  return success_response({
    "success": True,
    "message": "Aggregation complete",
    "result": result.to_dict(),
  })

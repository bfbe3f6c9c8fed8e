"""Utility functions for Cloud Functions."""

import json
from typing import Any

from firebase_functions import https_fn, logger


def handle_health_check(req: https_fn.Request) -> https_fn.Response | None:
  """Handle health check requests."""
  if req.path == "/__/health":
    return https_fn.Response("OK", status=200)
  return None


def success_response(
  data: dict[str, Any],
  status: int = 200,
) -> https_fn.Response:
  """Return a JSON success response."""
  logger.info(f"Success response: {data}")
  return https_fn.Response(
    json.dumps({"data": data}),
    status=status,
    mimetype='application/json',
  )


def error_response(
  message: str,
  *,
  error_type: str | None = None,
  status: int = 500,
) -> https_fn.Response:
  """Return a JSON error response with an optional typed error code."""
  logger.error(f"Error response: {message} ({error_type})")
  payload: dict[str, Any] = {"success": False, "error": message}
  if error_type:
    payload["error_type"] = error_type

  return https_fn.Response(
    json.dumps({"data": payload}),
    status=status,
    mimetype='application/json',
  )


def get_param(
  req: https_fn.Request,
  param_name: str,
  default: Any | None = None,
  required: bool = False,
) -> Any | None:
  """Get a parameter from the request."""
  if req.is_json:
    json_data = req.get_json()
    data = json_data.get('data', {}) if isinstance(json_data, dict) else {}
    val = data.get(param_name, default)
  else:
    val = req.args.get(param_name, default)

  if val is None and required:
    raise ValueError(f"Missing required parameter '{param_name}'")
  return val


def get_bool_param(
  req: https_fn.Request,
  param_name: str,
  default: bool = False,
  required: bool = False,
) -> bool:
  """Get a boolean parameter from the request."""
  str_param = get_param(req, param_name, str(default), required=required)
  if str_param is None:
    return default
  elif isinstance(str_param, bool):
    return str_param
  else:
    return str(str_param).lower() == 'true'

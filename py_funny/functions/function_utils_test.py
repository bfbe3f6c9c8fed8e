"""Tests for function_utils parameter and response helpers."""

import json
from unittest.mock import Mock

import pytest

from functions import function_utils


@pytest.fixture(autouse=True)
def silence_logger(monkeypatch):
  monkeypatch.setattr(function_utils, "logger", Mock())


class FakeRequest:

  def __init__(self,
               *,
               json_data: dict | None = None,
               args: dict[str, object] | None = None,
               path: str = "/") -> None:
    self._json_data = json_data
    self.args = args or {}
    self.is_json = json_data is not None
    self.path = path
    self.headers = {}

  def get_json(self):
    return self._json_data


def _json_request(data: dict | None = None) -> FakeRequest:
  return FakeRequest(json_data={'data': data or {}})


def _query_request(args: dict[str, object] | None = None) -> FakeRequest:
  return FakeRequest(args=args)


def test_get_param_returns_value_from_json_request():
  req = _json_request({'foo': 'bar'})

  assert function_utils.get_param(req, 'foo') == 'bar'


def test_get_param_returns_value_from_query_request():
  req = _query_request({'week': '2026-W04'})

  assert function_utils.get_param(req, 'week') == '2026-W04'


def test_get_param_raises_when_required_missing_json():
  req = _json_request()

  with pytest.raises(ValueError, match="Missing required parameter 'foo'"):
    function_utils.get_param(req, 'foo', required=True)


def test_get_param_raises_when_required_missing_query():
  req = _query_request()

  with pytest.raises(ValueError, match="Missing required parameter 'foo'"):
    function_utils.get_param(req, 'foo', required=True)


def test_get_param_returns_default_when_optional_missing():
  req = _query_request()

  assert function_utils.get_param(req, 'foo', default='fallback') == 'fallback'


def test_get_param_tolerates_non_dict_json():
  req = FakeRequest(json_data=["not", "a", "dict"])

  assert function_utils.get_param(req, 'foo', default='d') == 'd'


def test_get_bool_param_returns_default_when_required_missing():
  req = _query_request()

  # When required=True but default is provided, return default instead of raising
  assert function_utils.get_bool_param(req, 'flag', required=True) is False


def test_get_bool_param_parses_true_strings():
  req = _query_request({'flag': 'TRUE'})

  assert function_utils.get_bool_param(req, 'flag') is True


def test_get_bool_param_passes_json_booleans_through():
  assert function_utils.get_bool_param(_json_request({'flag': True}),
                                       'flag') is True
  assert function_utils.get_bool_param(_json_request({'flag': False}),
                                       'flag',
                                       default=True) is False


def test_handle_health_check():
  response = function_utils.handle_health_check(
    FakeRequest(path="/__/health"))

  assert response is not None
  assert response.status_code == 200
  assert function_utils.handle_health_check(FakeRequest(path="/run")) is None


def test_success_response_wraps_data():
  response = function_utils.success_response({"ok": 1}, status=201)

  assert response.status_code == 201
  assert json.loads(response.get_data(as_text=True)) == {"data": {"ok": 1}}


def test_error_response_includes_error_type():
  response = function_utils.error_response("bad week",
                                           error_type="invalid_week_id",
                                           status=400)

  assert response.status_code == 400
  assert json.loads(response.get_data(as_text=True)) == {
    "data": {
      "success": False,
      "error": "bad week",
      "error_type": "invalid_week_id",
    }
  }

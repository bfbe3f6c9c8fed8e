"""Firestore persistence for rating events and weekly rankings."""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import cast

from common import config, models, week_utils
from google.cloud.firestore import (SERVER_TIMESTAMP, Client,
                                    CollectionReference, DocumentSnapshot,
                                    FieldFilter)
from services import firestore as firestore_service


def rating_event_key(device_id: str, joke_id: str, week_id: str) -> str:
  """Document ID for a device's rating of a joke in a week.

  One document per (device, joke, week), so re-rating overwrites.
  """
  return f"{device_id}_{joke_id}_{week_id}"


class RankingsFirestore:
  """Reads rating events and reads/writes weekly rankings documents."""

  def __init__(self, client: Client | None = None):
    self._client = client if client is not None else firestore_service.db()

  def _events_collection(self) -> CollectionReference:
    return self._client.collection(config.RATING_EVENTS_COLLECTION)

  def _rankings_collection(self) -> CollectionReference:
    return self._client.collection(config.WEEKLY_RANKINGS_COLLECTION)

  def get_rating_events(self, week_id: str) -> list[models.RatingEvent]:
    """Return every rating event recorded for `week_id`."""
    query = self._events_collection().where(
      filter=FieldFilter('week_id', '==', week_id))
    docs = cast(Iterable[DocumentSnapshot], query.stream())
    return [
      models.RatingEvent.from_firestore_dict(doc.to_dict(), key=doc.id)
      for doc in docs if doc.exists
    ]

  def save_weekly_rankings(self, rankings: models.WeeklyRankings) -> None:
    """Replace the rankings document for the week."""
    data = rankings.to_dict()
    data['computed_at'] = SERVER_TIMESTAMP
    self._rankings_collection().document(rankings.week_id).set(data)

  def get_weekly_rankings(self,
                          week_id: str) -> models.WeeklyRankings | None:
    """Return the stored rankings for `week_id`, or None if not computed."""
    doc = self._rankings_collection().document(week_id).get()
    if not doc.exists:
      return None
    return models.WeeklyRankings.from_firestore_dict(doc.to_dict() or {},
                                                     key=doc.id)

  def record_rating_event(
    self,
    device_id: str,
    joke_id: str,
    rating: int,
    *,
    now: datetime.datetime | None = None,
  ) -> models.RatingEvent:
    """Record a device's rating for the current week.

    Raises:
        ValueError: If an ID is blank or the rating is not 1-5.
    """
    device_id = (device_id or '').strip()
    joke_id = (joke_id or '').strip()
    if not device_id or not joke_id:
      raise ValueError("device_id and joke_id are required")

    event = models.RatingEvent(
      joke_id=joke_id,
      rating=rating,
      device_id=device_id,
      week_id=week_utils.current_week_id(now),
    )
    valid_rating = event.valid_rating
    if valid_rating is None:
      raise ValueError(
        f"Rating must be an integer from {config.MIN_RATING} to "
        f"{config.MAX_RATING}, got {rating!r}")
    event.rating = valid_rating

    event.key = rating_event_key(device_id, joke_id, event.week_id)
    data = event.to_dict()
    data['timestamp'] = SERVER_TIMESTAMP
    self._events_collection().document(event.key).set(data)
    return event

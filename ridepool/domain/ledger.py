"""
Ride Ledger. Ride lifecycle: publish, one ride per employee per day.
Pure domain: receives the current rides, returns the rides to persist.
"""

import logging
import re
from datetime import date
from typing import List

from ridepool.domain import rejections
from ridepool.domain.models import (
    OperationResult,
    Outcome,
    ReservationTransaction,
    Ride,
    RideDraft,
)
from ridepool.domain.timeslots import has_time_conflict

logger = logging.getLogger(__name__)

_TAG_NOISE_RE = re.compile(r"[\s\-]")


def _normalize_tag(tag: str) -> str:
    return _TAG_NOISE_RE.sub("", tag or "").upper()


def rides_owned_by(rides: List[Ride], employee_id: str, as_of: date) -> List[Ride]:
    """Rides the employee published for as_of (at most one by construction)."""
    today = as_of.isoformat()
    return [r for r in rides if r.owner_id == employee_id and r.service_date == today]


def has_published_today(rides: List[Ride], employee_id: str, as_of: date) -> bool:
    if not employee_id:
        return False
    today = as_of.isoformat()
    return any(r.owner_id == employee_id and r.service_date == today for r in rides)


def can_publish_today(rides: List[Ride], employee_id: str, as_of: date) -> bool:
    return not has_published_today(rides, employee_id, as_of)


def is_vehicle_tag_available(rides: List[Ride], vehicle_tag: str, as_of: date) -> bool:
    """Plate not used by any ride dated as_of. Case and separators ignored."""
    wanted = _normalize_tag(vehicle_tag)
    today = as_of.isoformat()
    return not any(
        r.service_date == today and _normalize_tag(r.vehicle_tag) == wanted
        for r in rides
    )


def publish(rides: List[Ride], draft: RideDraft, as_of: date, ride_id: str) -> Outcome:
    """
    Checks, in order: caller present, no ride published today, no commitment
    (owned or reserved) at the same departure time today.
    Plate uniqueness is not checked here; see is_vehicle_tag_available.
    """
    if not draft.owner_id:
        return Outcome(result=rejections.reject(rejections.NO_CALLER))

    if has_published_today(rides, draft.owner_id, as_of):
        logger.debug("Publish rejected for %s: already published on %s", draft.owner_id, as_of)
        return Outcome(result=rejections.reject(rejections.ALREADY_PUBLISHED))

    today = as_of.isoformat()
    if has_time_conflict(rides, draft.owner_id, draft.departure_time, today):
        logger.debug("Publish rejected for %s: commitment at %s", draft.owner_id, draft.departure_time)
        return Outcome(result=rejections.reject(rejections.TIME_CONFLICT))

    ride = Ride(
        id=ride_id,
        owner_id=draft.owner_id,
        vehicle_kind=draft.vehicle_kind,
        vehicle_tag=draft.vehicle_tag,
        total_seats=draft.total_seats,
        departure_time=draft.departure_time,
        service_date=today,
        pickup_point=draft.pickup_point,
        destination=draft.destination,
        reserved_by=(),
    )
    return Outcome(
        result=OperationResult(success=True, message="Ride added successfully!", ride=ride),
        transaction=ReservationTransaction(rides=list(rides) + [ride]),
    )

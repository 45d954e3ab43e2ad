"""
Booking Matcher. Discovery (open rides, candidates, search) and seat reservation.
Pure domain: every function re-scans the rides it is given; no index.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional

from ridepool.domain import rejections
from ridepool.domain.models import (
    Booking,
    OperationResult,
    Outcome,
    ReservationTransaction,
    Ride,
    VehicleKind,
)
from ridepool.domain.timeslots import (
    DEFAULT_WINDOW_MIN,
    has_time_conflict,
    is_within_time_range,
)

logger = logging.getLogger(__name__)

# Etiquetas de estado por viaje para el empleado actual (mismo orden que reserve).
STATUS_AUTH_REQUIRED = "auth_required"
STATUS_AVAILABLE = "available"


def _find(rides: List[Ride], ride_id: str) -> Optional[int]:
    return next((i for i, r in enumerate(rides) if r.id == ride_id), None)


def list_todays_open_rides(rides: List[Ride], as_of: date) -> List[Ride]:
    """Rides dated as_of with at least one vacant seat, storage order."""
    today = as_of.isoformat()
    return [r for r in rides if r.service_date == today and r.total_seats > 0]


def list_candidates_for(
    rides: List[Ride],
    employee_id: Optional[str],
    window_minutes: int,
    now: str,
    as_of: date,
) -> List[Ride]:
    """
    Open rides today not owned by employee_id. window_minutes > 0 keeps only
    rides departing within that many minutes of now; 0 disables the filter.
    """
    out: List[Ride] = []
    for ride in list_todays_open_rides(rides, as_of):
        if employee_id and ride.owner_id == employee_id:
            continue
        if window_minutes > 0 and not is_within_time_range(ride.departure_time, now, window_minutes):
            continue
        out.append(ride)
    return out


def search(
    rides: List[Ride],
    as_of: date,
    search_time: Optional[str] = None,
    vehicle_kind: Optional[VehicleKind] = None,
    window_minutes: int = DEFAULT_WINDOW_MIN,
) -> List[Ride]:
    result = list_todays_open_rides(rides, as_of)
    if vehicle_kind:
        result = [r for r in result if r.vehicle_kind == vehicle_kind]
    if search_time:
        result = [r for r in result if is_within_time_range(r.departure_time, search_time, window_minutes)]
    return result


def rides_reserved_by(rides: List[Ride], employee_id: str, as_of: date) -> List[Ride]:
    today = as_of.isoformat()
    return [r for r in rides if r.service_date == today and employee_id in r.reserved_by]


def _first_rejection(rides: List[Ride], ride: Ride, employee_id: str) -> Optional[str]:
    """Reserve checks 2-5; the caller has already resolved the ride."""
    if ride.owner_id == employee_id:
        return rejections.OWN_RIDE
    if employee_id in ride.reserved_by:
        return rejections.ALREADY_RESERVED
    if ride.total_seats <= 0:
        return rejections.NO_SEATS
    if has_time_conflict(rides, employee_id, ride.departure_time, ride.service_date):
        return rejections.TIME_CONFLICT
    return None


def ride_status_for(rides: List[Ride], ride: Ride, employee_id: Optional[str]) -> str:
    """Label explaining whether employee_id could reserve ride right now."""
    if not employee_id:
        return STATUS_AUTH_REQUIRED
    return _first_rejection(rides, ride, employee_id) or STATUS_AVAILABLE


def reserve(
    rides: List[Ride],
    bookings: List[Booking],
    ride_id: str,
    employee_id: Optional[str],
    as_of: date,
) -> Outcome:
    """
    Ordered checks, first failure wins: ride exists, not own ride, not already
    reserved, seats left, no other commitment at the same departure time.
    On success both collections come back in a single transaction.
    """
    if not employee_id:
        return Outcome(result=rejections.reject(rejections.NO_CALLER))

    index = _find(rides, ride_id)
    if index is None:
        return Outcome(result=rejections.reject(rejections.RIDE_NOT_FOUND))

    ride = rides[index]
    code = _first_rejection(rides, ride, employee_id)
    if code is not None:
        logger.debug("Reserve of %s by %s rejected: %s", ride_id, employee_id, code)
        return Outcome(result=rejections.reject(code))

    updated = replace(
        ride,
        total_seats=ride.total_seats - 1,
        reserved_by=ride.reserved_by + (employee_id,),
    )
    new_rides = list(rides)
    new_rides[index] = updated
    new_bookings = list(bookings) + [
        Booking(ride_id=ride_id, employee_id=employee_id, booking_date=as_of.isoformat())
    ]
    return Outcome(
        result=OperationResult(success=True, message="Ride booked successfully", ride=updated),
        transaction=ReservationTransaction(rides=new_rides, bookings=new_bookings),
    )


def cancel(
    rides: List[Ride],
    bookings: List[Booking],
    ride_id: str,
    employee_id: Optional[str],
) -> Outcome:
    """Releases employee_id's seat. No-op (not_reserved) if they never held one."""
    if not employee_id:
        return Outcome(result=rejections.reject(rejections.NO_CALLER))

    index = _find(rides, ride_id)
    if index is None:
        return Outcome(result=rejections.reject(rejections.RIDE_NOT_FOUND))

    ride = rides[index]
    if employee_id not in ride.reserved_by:
        return Outcome(result=rejections.reject(rejections.NOT_RESERVED))

    updated = replace(
        ride,
        total_seats=ride.total_seats + 1,
        reserved_by=tuple(e for e in ride.reserved_by if e != employee_id),
    )
    new_rides = list(rides)
    new_rides[index] = updated
    new_bookings = [
        b for b in bookings
        if not (b.ride_id == ride_id and b.employee_id == employee_id)
    ]
    return Outcome(
        result=OperationResult(success=True, message="Booking cancelled", ride=updated),
        transaction=ReservationTransaction(rides=new_rides, bookings=new_bookings),
    )

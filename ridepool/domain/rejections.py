"""
Ridepool rejection codes. Reported to callers as OperationResult, never raised.
"""

from ridepool.domain.models import OperationResult

NO_CALLER = "no_caller"
ALREADY_PUBLISHED = "already_published"
TIME_CONFLICT = "time_conflict"
VEHICLE_TAG_IN_USE = "vehicle_tag_in_use"
RIDE_NOT_FOUND = "ride_not_found"
OWN_RIDE = "own_ride"
ALREADY_RESERVED = "already_reserved"
NO_SEATS = "no_seats"
NOT_RESERVED = "not_reserved"
STORAGE_ERROR = "storage_error"

MESSAGES = {
    NO_CALLER: "No employee is logged in",
    ALREADY_PUBLISHED: "You already have a ride for today. Only one ride per day is allowed.",
    TIME_CONFLICT: "You already have a ride booked at this time.",
    VEHICLE_TAG_IN_USE: "Vehicle number is already in use for today.",
    RIDE_NOT_FOUND: "Ride not found",
    OWN_RIDE: "You cannot book your own ride",
    ALREADY_RESERVED: "You have already booked this ride",
    NO_SEATS: "No vacant seats available",
    NOT_RESERVED: "You have not booked this ride",
    STORAGE_ERROR: "Error performing operation",
}


def reject(code: str) -> OperationResult:
    return OperationResult(success=False, message=MESSAGES[code], error_code=code)

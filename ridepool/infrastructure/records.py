"""
Ridepool record codec. Raw dict <-> domain Ride / Booking / Employee.
Loaders skip records they cannot read instead of failing the whole collection.
"""

import logging

from ridepool.domain.models import Booking, Employee, Ride, VehicleKind
from ridepool.domain.timeslots import parse_hhmm

logger = logging.getLogger(__name__)


def ride_to_record(ride: Ride) -> dict:
    return {
        "id": ride.id,
        "owner_id": ride.owner_id,
        "vehicle_kind": ride.vehicle_kind.value,
        "vehicle_tag": ride.vehicle_tag,
        "total_seats": ride.total_seats,
        "departure_time": ride.departure_time,
        "service_date": ride.service_date,
        "pickup_point": ride.pickup_point,
        "destination": ride.destination,
        "reserved_by": list(ride.reserved_by),
    }


def booking_to_record(booking: Booking) -> dict:
    return {
        "ride_id": booking.ride_id,
        "employee_id": booking.employee_id,
        "booking_date": booking.booking_date,
    }


def employee_to_record(employee: Employee) -> dict:
    return {"id": employee.id, "name": employee.name}


def load_rides(raw_rides: list[dict]) -> list[Ride]:
    result: list[Ride] = []
    for raw in raw_rides:
        departure_time = parse_hhmm(raw.get("departure_time")) if isinstance(raw, dict) else None
        if departure_time is None:
            logger.warning("Skipping unreadable ride record: %r", raw)
            continue
        try:
            reserved = []
            for eid in raw.get("reserved_by") or []:
                # Un empleado aparece como mucho una vez.
                if str(eid) not in reserved:
                    reserved.append(str(eid))
            result.append(
                Ride(
                    id=str(raw["id"]),
                    owner_id=str(raw["owner_id"]),
                    vehicle_kind=VehicleKind(raw["vehicle_kind"]),
                    vehicle_tag=str(raw.get("vehicle_tag", "")),
                    total_seats=max(0, int(raw.get("total_seats", 0))),
                    departure_time=departure_time,
                    service_date=str(raw["service_date"]),
                    pickup_point=str(raw.get("pickup_point", "")),
                    destination=str(raw.get("destination", "")),
                    reserved_by=tuple(reserved),
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping unreadable ride record: %r", raw)
    return result


def load_bookings(raw_bookings: list[dict]) -> list[Booking]:
    result: list[Booking] = []
    for raw in raw_bookings:
        try:
            result.append(
                Booking(
                    ride_id=str(raw["ride_id"]),
                    employee_id=str(raw["employee_id"]),
                    booking_date=str(raw["booking_date"]),
                )
            )
        except (KeyError, TypeError):
            logger.warning("Skipping unreadable booking record: %r", raw)
    return result


def load_employees(raw_employees: list[dict]) -> list[Employee]:
    result: list[Employee] = []
    for raw in raw_employees:
        try:
            name = raw.get("name")
            result.append(Employee(id=str(raw["id"]), name=str(name) if name else None))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping unreadable employee record: %r", raw)
    return result

"""
Ridepool domain models. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class VehicleKind(str, Enum):
    BIKE = "Bike"
    CAR = "Car"


@dataclass(frozen=True)
class Ride:
    id: str
    owner_id: str
    vehicle_kind: VehicleKind
    vehicle_tag: str
    # Plazas libres restantes, no la capacidad original.
    total_seats: int
    departure_time: str  # "HH:MM"
    service_date: str  # "YYYY-MM-DD"
    pickup_point: str
    destination: str
    reserved_by: Tuple[str, ...] = ()

    @property
    def is_full(self) -> bool:
        return self.total_seats <= 0

    def involves(self, employee_id: str) -> bool:
        """True if employee_id drives this ride or holds a seat on it."""
        return self.owner_id == employee_id or employee_id in self.reserved_by


@dataclass(frozen=True)
class RideDraft:
    """Publish request as accepted by the ledger (already validated by the caller)."""
    owner_id: str
    vehicle_kind: VehicleKind
    vehicle_tag: str
    total_seats: int
    departure_time: str
    pickup_point: str
    destination: str


@dataclass(frozen=True)
class Booking:
    ride_id: str
    employee_id: str
    booking_date: str


@dataclass(frozen=True)
class Employee:
    id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class ReservationTransaction:
    """
    Both collections after a mutation, written by one store call.
    None means "collection untouched".
    """
    rides: Optional[List[Ride]] = None
    bookings: Optional[List[Booking]] = None


@dataclass
class OperationResult:
    success: bool
    message: str = ""
    error_code: Optional[str] = None
    ride: Optional[Ride] = None


@dataclass
class Outcome:
    """Salida pura de la capa de dominio: resultado + colecciones a persistir."""
    result: OperationResult
    transaction: Optional[ReservationTransaction] = None


@dataclass
class DaySummary:
    date: str
    employee_id: str
    my_rides: List[Ride] = field(default_factory=list)
    booked_rides: List[Ride] = field(default_factory=list)
    can_publish: bool = False

"""
Ridepool API request/response schemas. Pydantic only in api layer.
Form validation (required fields, plate format, seat bounds) lives here.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ridepool.application.config import (
    BIKE_SEATS,
    EMPLOYEE_ID_MAX_LEN,
    EMPLOYEE_ID_MIN_LEN,
    MAX_CAR_SEATS,
    MIN_CAR_SEATS,
    VEHICLE_TAG_PATTERN,
)
from ridepool.domain.models import DaySummary, Ride, VehicleKind
from ridepool.domain.timeslots import format_display_time, parse_hhmm


class LoginRequest(BaseModel):
    employee_id: str = Field(min_length=EMPLOYEE_ID_MIN_LEN, max_length=EMPLOYEE_ID_MAX_LEN)
    name: Optional[str] = None

    @field_validator("employee_id", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class SessionSchema(BaseModel):
    employee_id: Optional[str] = None


class EmployeeSchema(BaseModel):
    id: str
    name: Optional[str] = None


class PublishRideRequest(BaseModel):
    vehicle_type: VehicleKind
    vehicle_no: str = Field(pattern=VEHICLE_TAG_PATTERN)
    vacant_seats: int
    time: str  # "HH:MM"
    pickup_point: str = Field(min_length=1)
    destination: str = Field(min_length=1)

    @field_validator("vehicle_no", mode="before")
    @classmethod
    def _upper_plate(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        normalized = parse_hhmm(value)
        if normalized is None:
            raise ValueError("time must be HH:MM")
        return normalized

    @model_validator(mode="after")
    def _check_seats(self):
        # Moto: exactamente 1 plaza. Coche: 1-7.
        if self.vehicle_type == VehicleKind.BIKE and self.vacant_seats != BIKE_SEATS:
            raise ValueError(f"Bike rides carry exactly {BIKE_SEATS} seat")
        if self.vehicle_type == VehicleKind.CAR and not (MIN_CAR_SEATS <= self.vacant_seats <= MAX_CAR_SEATS):
            raise ValueError(f"Car rides carry {MIN_CAR_SEATS}-{MAX_CAR_SEATS} seats")
        return self


class RideSchema(BaseModel):
    id: str
    owner_id: str
    vehicle_kind: VehicleKind
    vehicle_tag: str
    total_seats: int
    departure_time: str
    display_time: str
    service_date: str
    pickup_point: str
    destination: str
    reserved_by: list[str]
    status: Optional[str] = None

    @classmethod
    def from_ride(cls, ride: Ride, status: Optional[str] = None) -> "RideSchema":
        return cls(
            id=ride.id,
            owner_id=ride.owner_id,
            vehicle_kind=ride.vehicle_kind,
            vehicle_tag=ride.vehicle_tag,
            total_seats=ride.total_seats,
            departure_time=ride.departure_time,
            display_time=format_display_time(ride.departure_time),
            service_date=ride.service_date,
            pickup_point=ride.pickup_point,
            destination=ride.destination,
            reserved_by=list(ride.reserved_by),
            status=status,
        )


class BookingSchema(BaseModel):
    ride_id: str
    employee_id: str
    booking_date: str


class OperationResponse(BaseModel):
    success: bool
    message: str
    ride: Optional[RideSchema] = None


class CanPublishSchema(BaseModel):
    employee_id: str
    can_publish: bool


class TodaySchema(BaseModel):
    date: str
    employee_id: str
    my_rides: list[RideSchema]
    booked_rides: list[RideSchema]
    can_publish: bool

    @classmethod
    def from_summary(cls, summary: DaySummary) -> "TodaySchema":
        return cls(
            date=summary.date,
            employee_id=summary.employee_id,
            my_rides=[RideSchema.from_ride(r) for r in summary.my_rides],
            booked_rides=[RideSchema.from_ride(r) for r in summary.booked_rides],
            can_publish=summary.can_publish,
        )

"""
Ridepool API router. Calls application only. No business logic.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ridepool.api.schemas import (
    BookingSchema,
    CanPublishSchema,
    EmployeeSchema,
    LoginRequest,
    OperationResponse,
    PublishRideRequest,
    RideSchema,
    SessionSchema,
    TodaySchema,
)
from ridepool.application.config import (
    COMMON_LOCATIONS,
    DATA_PATH,
    DEFAULT_CANDIDATE_WINDOW_MIN,
)
from ridepool.application.identity import SessionIdentity
from ridepool.application.ride_service import RideService
from ridepool.application.today import get_today
from ridepool.domain import rejections
from ridepool.domain.models import OperationResult, Ride, RideDraft, VehicleKind
from ridepool.domain.timeslots import parse_hhmm, to_minutes
from ridepool.infrastructure.store import JsonFileStore, StoreError

router = APIRouter()

# error_code -> HTTP status; el resto de rechazos de reglas es 409.
_STATUS_BY_CODE = {
    rejections.NO_CALLER: 401,
    rejections.RIDE_NOT_FOUND: 404,
    rejections.STORAGE_ERROR: 500,
}


@lru_cache(maxsize=None)
def get_ride_service() -> RideService:
    return RideService(JsonFileStore(DATA_PATH))


@lru_cache(maxsize=None)
def get_identity() -> SessionIdentity:
    return SessionIdentity(get_ride_service())


def require_employee(identity: SessionIdentity = Depends(get_identity)) -> str:
    """Guard: endpoints below need a logged-in employee."""
    employee_id = identity.current_employee_id()
    if not employee_id:
        raise HTTPException(status_code=401, detail=rejections.MESSAGES[rejections.NO_CALLER])
    return employee_id


def _to_response(result: OperationResult) -> OperationResponse:
    if not result.success:
        status = _STATUS_BY_CODE.get(result.error_code, 409)
        raise HTTPException(
            status_code=status,
            detail={"error_code": result.error_code, "message": result.message},
        )
    return OperationResponse(
        success=True,
        message=result.message,
        ride=RideSchema.from_ride(result.ride) if result.ride else None,
    )


def _with_status(service: RideService, rides: list[Ride], employee_id: Optional[str]) -> list[RideSchema]:
    statuses = service.ride_statuses(rides, employee_id)
    return [RideSchema.from_ride(r, statuses.get(r.id)) for r in rides]


# --- Sesión ---


@router.post("/session/login", response_model=SessionSchema)
def post_login(request: LoginRequest, identity: SessionIdentity = Depends(get_identity)) -> SessionSchema:
    """
    POST /session/login
    Registers the employee on first use and makes them the current caller.
    """
    try:
        identity.set_current_employee(request.employee_id, request.name)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return SessionSchema(employee_id=identity.current_employee_id())


@router.post("/session/logout", response_model=SessionSchema)
def post_logout(identity: SessionIdentity = Depends(get_identity)) -> SessionSchema:
    identity.logout()
    return SessionSchema(employee_id=None)


@router.get("/session/me", response_model=SessionSchema)
def get_me(identity: SessionIdentity = Depends(get_identity)) -> SessionSchema:
    return SessionSchema(employee_id=identity.current_employee_id())


@router.get("/employees", response_model=list[EmployeeSchema])
def get_employees(service: RideService = Depends(get_ride_service)) -> list[EmployeeSchema]:
    return [EmployeeSchema(id=e.id, name=e.name) for e in service.employees.list_all()]


@router.get("/locations", response_model=list[str])
def get_locations() -> list[str]:
    return list(COMMON_LOCATIONS)


# --- Viajes: consulta ---


@router.get("/rides/today", response_model=list[RideSchema])
def get_open_rides(
    service: RideService = Depends(get_ride_service),
    identity: SessionIdentity = Depends(get_identity),
) -> list[RideSchema]:
    """GET /rides/today — open rides today, storage order."""
    return _with_status(service, service.list_todays_open_rides(), identity.current_employee_id())


@router.get("/rides/search", response_model=list[RideSchema])
def get_search(
    time: Optional[str] = None,
    vehicle_type: Optional[VehicleKind] = None,
    service: RideService = Depends(get_ride_service),
    identity: SessionIdentity = Depends(get_identity),
) -> list[RideSchema]:
    """
    GET /rides/search

    Query params:
        - time (str, opcional): "HH:MM"; rides within 60 minutes
        - vehicle_type (str, opcional): Bike | Car
    """
    search_time = None
    if time:
        search_time = parse_hhmm(time)
        if search_time is None:
            raise HTTPException(status_code=422, detail="time must be HH:MM")
    rides = service.search(search_time=search_time, vehicle_kind=vehicle_type)
    return _with_status(service, rides, identity.current_employee_id())


@router.get("/rides/candidates", response_model=list[RideSchema])
def get_candidates(
    window: int = DEFAULT_CANDIDATE_WINDOW_MIN,
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> list[RideSchema]:
    """GET /rides/candidates — rides others offer near the current time. window=0 disables the time filter."""
    if window < 0:
        raise HTTPException(status_code=422, detail="window must be >= 0")
    return _with_status(service, service.list_candidates_for(employee_id, window), employee_id)


@router.get("/rides/mine", response_model=list[RideSchema])
def get_my_rides(
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> list[RideSchema]:
    return [RideSchema.from_ride(r) for r in service.my_rides(employee_id)]


@router.get("/rides/booked", response_model=list[RideSchema])
def get_booked_rides(
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> list[RideSchema]:
    return [RideSchema.from_ride(r) for r in service.booked_rides(employee_id)]


@router.get("/rides/can-publish", response_model=CanPublishSchema)
def get_can_publish(
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> CanPublishSchema:
    return CanPublishSchema(employee_id=employee_id, can_publish=service.can_publish_today(employee_id))


@router.get("/bookings", response_model=list[BookingSchema])
def get_my_bookings(
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> list[BookingSchema]:
    """GET /bookings — booking records of the current employee."""
    return [
        BookingSchema(ride_id=b.ride_id, employee_id=b.employee_id, booking_date=b.booking_date)
        for b in service.bookings_for(employee_id)
    ]


@router.get("/today", response_model=TodaySchema)
def get_today_summary(
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> TodaySchema:
    return TodaySchema.from_summary(get_today(service, employee_id))


# --- Viajes: escritura ---


@router.post("/rides", response_model=OperationResponse, status_code=201)
def post_ride(
    request: PublishRideRequest,
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> OperationResponse:
    """
    POST /rides

    Body:
        - vehicle_type (str): Bike | Car
        - vehicle_no (str): plate, e.g. DL01AB1234
        - vacant_seats (int): Bike 1, Car 1-7
        - time (str): "HH:MM", later than now
        - pickup_point (str), destination (str)
    """
    now = service.clock().strftime("%H:%M")
    if to_minutes(request.time) <= to_minutes(now):
        raise HTTPException(status_code=422, detail="Time must be in the future")
    draft = RideDraft(
        owner_id=employee_id,
        vehicle_kind=request.vehicle_type,
        vehicle_tag=request.vehicle_no,
        total_seats=request.vacant_seats,
        departure_time=request.time,
        pickup_point=request.pickup_point,
        destination=request.destination,
    )
    return _to_response(service.publish_ride(draft))


@router.post("/rides/{ride_id}/reservation", response_model=OperationResponse)
def post_reservation(
    ride_id: str,
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> OperationResponse:
    return _to_response(service.reserve(ride_id, employee_id))


@router.delete("/rides/{ride_id}/reservation", response_model=OperationResponse)
def delete_reservation(
    ride_id: str,
    employee_id: str = Depends(require_employee),
    service: RideService = Depends(get_ride_service),
) -> OperationResponse:
    return _to_response(service.cancel(ride_id, employee_id))

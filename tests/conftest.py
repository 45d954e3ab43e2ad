import itertools
from datetime import date, datetime

import pytest

from ridepool.application.ride_service import RideService
from ridepool.domain.models import Ride, RideDraft, VehicleKind
from ridepool.infrastructure.store import InMemoryStore

NOW = datetime(2026, 10, 19, 8, 30)
TODAY = NOW.date()
YESTERDAY = date(2026, 10, 18)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(store: InMemoryStore) -> RideService:
    counter = itertools.count(1)
    return RideService(store, clock=lambda: NOW, id_factory=lambda: f"R{next(counter)}")


@pytest.fixture
def make_draft():
    plates = itertools.count(1000)

    def _make(
        owner_id: str = "EMP001",
        departure_time: str = "09:00",
        total_seats: int = 3,
        vehicle_kind: VehicleKind = VehicleKind.CAR,
        vehicle_tag: str | None = None,
    ) -> RideDraft:
        return RideDraft(
            owner_id=owner_id,
            vehicle_kind=vehicle_kind,
            vehicle_tag=vehicle_tag or f"DL01AB{next(plates)}",
            total_seats=total_seats,
            departure_time=departure_time,
            pickup_point="Office Main Gate",
            destination="Cyber City",
        )

    return _make


@pytest.fixture
def make_ride():
    ids = itertools.count(1)

    def _make(
        owner_id: str = "EMP001",
        departure_time: str = "09:00",
        total_seats: int = 3,
        vehicle_kind: VehicleKind = VehicleKind.CAR,
        service_date: date = TODAY,
        reserved_by: tuple[str, ...] = (),
        vehicle_tag: str | None = None,
    ) -> Ride:
        n = next(ids)
        return Ride(
            id=f"R{n}",
            owner_id=owner_id,
            vehicle_kind=vehicle_kind,
            vehicle_tag=vehicle_tag or f"DL01AB{1000 + n}",
            total_seats=total_seats,
            departure_time=departure_time,
            service_date=service_date.isoformat(),
            pickup_point="Office Main Gate",
            destination="Cyber City",
            reserved_by=reserved_by,
        )

    return _make

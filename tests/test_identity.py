import threading

import pytest

from conftest import NOW
from ridepool.application.identity import SessionIdentity
from ridepool.application.ride_service import RideService
from ridepool.infrastructure.store import InMemoryStore, JsonFileStore


class SlowStore(JsonFileStore):
    """Runs on_read once, between commit reading the document and writing it back."""

    def __init__(self, path):
        super().__init__(path)
        self.on_read = None
        self._in_write = False

    def _write(self, changes):
        self._in_write = True
        try:
            super()._write(changes)
        finally:
            self._in_write = False

    def _read_document(self):
        doc = super()._read_document()
        hook = self.on_read
        if hook is not None and self._in_write:
            self.on_read = None
            hook()
        return doc


@pytest.fixture
def service() -> RideService:
    return RideService(InMemoryStore(), clock=lambda: NOW)


def test_login_registers_employee_once(service) -> None:
    identity = SessionIdentity(service)
    assert identity.current_employee_id() is None

    identity.set_current_employee("EMP001")
    identity.set_current_employee("EMP001")

    assert identity.current_employee_id() == "EMP001"
    assert [e.id for e in service.employees.list_all()] == ["EMP001"]


def test_login_strips_and_rejects_blank(service) -> None:
    identity = SessionIdentity(service)
    identity.set_current_employee("  EMP002 ")
    assert identity.current_employee_id() == "EMP002"

    with pytest.raises(ValueError):
        identity.set_current_employee("   ")
    assert identity.current_employee_id() == "EMP002"


def test_logout_clears_current_but_keeps_employee(service) -> None:
    identity = SessionIdentity(service)
    identity.set_current_employee("EMP001")
    identity.logout()

    assert identity.current_employee_id() is None
    assert service.employees.exists("EMP001")


def test_identity_is_shared_by_every_caller(service) -> None:
    identity = SessionIdentity(service)
    identity.set_current_employee("EMP001")
    identity.set_current_employee("EMP002")

    assert identity.current_employee_id() == "EMP002"
    assert [e.id for e in service.employees.list_all()] == ["EMP001", "EMP002"]


def test_login_does_not_overwrite_concurrent_reservation(tmp_path, make_draft) -> None:
    store = SlowStore(tmp_path / "ridepool.json")
    service = RideService(store, clock=lambda: NOW, id_factory=lambda: "R1")
    service.publish_ride(make_draft(owner_id="EMP001", total_seats=2))
    identity = SessionIdentity(service)

    worker = threading.Thread(target=service.reserve, args=("R1", "EMP002"))

    def start_reservation():
        # La reserva tiene que esperar a que el login termine de escribir.
        worker.start()
        worker.join(timeout=0.2)

    store.on_read = start_reservation
    identity.set_current_employee("EMP050")
    worker.join()

    ride = service.list_todays_open_rides()[0]
    assert ride.reserved_by == ("EMP002",)
    assert ride.total_seats == 1
    assert service.employees.exists("EMP050")
    assert [b.ride_id for b in service.bookings_for("EMP002")] == ["R1"]


def test_upsert_updates_name_only_when_given(service) -> None:
    employees = service.employees
    employees.upsert("EMP001", "Asha")
    employees.upsert("EMP001")
    assert employees.get("EMP001").name == "Asha"

    employees.upsert("EMP001", "Asha K")
    assert employees.get("EMP001").name == "Asha K"
    assert len(employees.list_all()) == 1


def test_records_with(service) -> None:
    employees = service.employees
    employees.upsert("EMP001")
    assert employees.records_with("EMP001") is None
    assert employees.records_with("EMP002") == [
        {"id": "EMP001", "name": None},
        {"id": "EMP002", "name": None},
    ]
    assert not employees.exists("EMP002")

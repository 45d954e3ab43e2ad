"""
Ride service. Operation boundary between callers and the pure domain.

Every call reads the store fresh, runs the domain function with an explicit
as_of date, and writes back through one Store.commit. Storage faults become a
generic storage_error result; nothing is raised to the caller.
"""

import logging
import threading
import uuid
from datetime import date, datetime
from typing import Callable, Optional

from ridepool.application.config import (
    BOOKINGS_COLLECTION,
    DEFAULT_CANDIDATE_WINDOW_MIN,
    DEFAULT_SEARCH_WINDOW_MIN,
    EMPLOYEES_COLLECTION,
    RIDES_COLLECTION,
)
from ridepool.domain import ledger, matcher, rejections
from ridepool.domain.models import (
    Booking,
    Employee,
    OperationResult,
    Outcome,
    ReservationTransaction,
    Ride,
    RideDraft,
    VehicleKind,
)
from ridepool.infrastructure.employee_repository import EmployeeRepository
from ridepool.infrastructure.records import (
    booking_to_record,
    load_bookings,
    load_rides,
    ride_to_record,
)
from ridepool.infrastructure.store import Store, StoreError

logger = logging.getLogger(__name__)


def _new_ride_id() -> str:
    return uuid.uuid4().hex


class RideService:
    def __init__(
        self,
        store: Store,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_ride_id,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self.employees = EmployeeRepository(store)
        # Serializa lectura-comprobación-escritura dentro del proceso.
        self._lock = threading.RLock()

    # --- helpers ---

    def today(self) -> date:
        return self.clock().date()

    def _now_hhmm(self) -> str:
        return self.clock().strftime("%H:%M")

    def _rides(self) -> list[Ride]:
        return load_rides(self.store.load_all(RIDES_COLLECTION))

    def _bookings(self) -> list[Booking]:
        return load_bookings(self.store.load_all(BOOKINGS_COLLECTION))

    def _commit(self, transaction: ReservationTransaction, extra: Optional[dict] = None) -> None:
        changes: dict[str, list[dict]] = dict(extra or {})
        if transaction.rides is not None:
            changes[RIDES_COLLECTION] = [ride_to_record(r) for r in transaction.rides]
        if transaction.bookings is not None:
            changes[BOOKINGS_COLLECTION] = [booking_to_record(b) for b in transaction.bookings]
        self.store.commit(changes)

    def _apply(self, outcome: Outcome, extra: Optional[dict] = None) -> OperationResult:
        if not outcome.result.success or outcome.transaction is None:
            return outcome.result
        self._commit(outcome.transaction, extra)
        return outcome.result

    # --- Ride Ledger ---

    def has_published_today(self, employee_id: Optional[str]) -> bool:
        return ledger.has_published_today(self._rides(), employee_id, self.today())

    def can_publish_today(self, employee_id: Optional[str]) -> bool:
        return ledger.can_publish_today(self._rides(), employee_id, self.today())

    def register_employee(self, employee_id: str, name: Optional[str] = None) -> Employee:
        """Upsert at login, under the same lock as every other store write."""
        with self._lock:
            return self.employees.upsert(employee_id, name)

    def publish_ride(self, draft: RideDraft) -> OperationResult:
        """
        Ledger scheduling rules first (one ride per day, no time conflict),
        then the caller-side plate check, before anything is written.
        Registers the owner as an employee in the same commit.
        """
        with self._lock:
            try:
                rides = self._rides()
                as_of = self.today()
                outcome = ledger.publish(rides, draft, as_of, self.id_factory())
                if not outcome.result.success:
                    return outcome.result
                if not ledger.is_vehicle_tag_available(rides, draft.vehicle_tag, as_of):
                    return rejections.reject(rejections.VEHICLE_TAG_IN_USE)

                extra = {}
                employee_records = self.employees.records_with(draft.owner_id)
                if employee_records is not None:
                    extra[EMPLOYEES_COLLECTION] = employee_records
                result = self._apply(outcome, extra)
            except StoreError:
                logger.exception("Error adding ride for %s", draft.owner_id)
                return rejections.reject(rejections.STORAGE_ERROR)

        if result.success:
            logger.info("Ride %s published by %s at %s", result.ride.id, draft.owner_id, draft.departure_time)
        return result

    def my_rides(self, employee_id: str) -> list[Ride]:
        return ledger.rides_owned_by(self._rides(), employee_id, self.today())

    # --- Booking Matcher: discovery ---

    def list_todays_open_rides(self) -> list[Ride]:
        return matcher.list_todays_open_rides(self._rides(), self.today())

    def list_candidates_for(
        self,
        employee_id: Optional[str],
        window_minutes: int = DEFAULT_CANDIDATE_WINDOW_MIN,
    ) -> list[Ride]:
        return matcher.list_candidates_for(
            self._rides(), employee_id, window_minutes, self._now_hhmm(), self.today()
        )

    def search(
        self,
        search_time: Optional[str] = None,
        vehicle_kind: Optional[VehicleKind] = None,
    ) -> list[Ride]:
        return matcher.search(
            self._rides(),
            self.today(),
            search_time=search_time,
            vehicle_kind=vehicle_kind,
            window_minutes=DEFAULT_SEARCH_WINDOW_MIN,
        )

    def booked_rides(self, employee_id: str) -> list[Ride]:
        return matcher.rides_reserved_by(self._rides(), employee_id, self.today())

    def ride_statuses(self, rides: list[Ride], employee_id: Optional[str]) -> dict[str, str]:
        """ride_id -> status label for employee_id, against one fresh read."""
        current = self._rides()
        return {r.id: matcher.ride_status_for(current, r, employee_id) for r in rides}

    # --- Booking Matcher: reserve / cancel ---

    def reserve(self, ride_id: str, employee_id: Optional[str]) -> OperationResult:
        with self._lock:
            try:
                outcome = matcher.reserve(
                    self._rides(), self._bookings(), ride_id, employee_id, self.today()
                )
                result = self._apply(outcome)
            except StoreError:
                logger.exception("Error booking ride %s for %s", ride_id, employee_id)
                return rejections.reject(rejections.STORAGE_ERROR)

        if result.success:
            logger.info("Ride %s booked by %s (%d seats left)", ride_id, employee_id, result.ride.total_seats)
        return result

    def cancel(self, ride_id: str, employee_id: Optional[str]) -> OperationResult:
        with self._lock:
            try:
                outcome = matcher.cancel(self._rides(), self._bookings(), ride_id, employee_id)
                result = self._apply(outcome)
            except StoreError:
                logger.exception("Error cancelling ride %s for %s", ride_id, employee_id)
                return rejections.reject(rejections.STORAGE_ERROR)

        if result.success:
            logger.info("Booking on ride %s cancelled by %s", ride_id, employee_id)
        return result

    def bookings_for(self, employee_id: str) -> list[Booking]:
        return [b for b in self._bookings() if b.employee_id == employee_id]

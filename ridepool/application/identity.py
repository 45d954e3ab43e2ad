"""
Identity provider. Holds the current employee id; login upserts the employee.
"""

import logging
from typing import Optional, Protocol

from ridepool.application.ride_service import RideService

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def current_employee_id(self) -> Optional[str]:
        ...

    def set_current_employee(self, employee_id: str, name: Optional[str] = None) -> None:
        ...

    def logout(self) -> None:
        ...


class SessionIdentity:
    """
    Single-session identity: one logged-in employee per process.

    Served over HTTP it is shared by every client, like the browser-local
    session it replaces; a login from one client changes the caller seen by
    all of them. Registration goes through RideService so it is serialized
    with reservations on the same store.
    """

    def __init__(self, service: RideService):
        self.service = service
        self._current: Optional[str] = None

    def current_employee_id(self) -> Optional[str]:
        return self._current

    def set_current_employee(self, employee_id: str, name: Optional[str] = None) -> None:
        employee_id = (employee_id or "").strip()
        if not employee_id:
            raise ValueError("employee_id must not be empty")
        self.service.register_employee(employee_id, name)
        self._current = employee_id
        logger.info("Employee %s logged in", employee_id)

    def logout(self) -> None:
        if self._current is not None:
            logger.info("Employee %s logged out", self._current)
        self._current = None

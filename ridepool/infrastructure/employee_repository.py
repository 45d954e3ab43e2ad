"""
Employee repository over the store. Employees are upserted, never deleted.
"""

import logging

from ridepool.application.config import EMPLOYEES_COLLECTION
from ridepool.domain.models import Employee
from ridepool.infrastructure.records import employee_to_record, load_employees
from ridepool.infrastructure.store import Store

logger = logging.getLogger(__name__)


class EmployeeRepository:
    def __init__(self, store: Store):
        self.store = store

    def list_all(self) -> list[Employee]:
        return load_employees(self.store.load_all(EMPLOYEES_COLLECTION))

    def get(self, employee_id: str) -> Employee | None:
        return next((e for e in self.list_all() if e.id == employee_id), None)

    def exists(self, employee_id: str) -> bool:
        return self.get(employee_id) is not None

    def upsert(self, employee_id: str, name: str | None = None) -> Employee:
        """
        Crea el empleado si no existe. Un nombre nuevo sustituye al anterior;
        name=None conserva el existente.
        """
        employees = self.list_all()
        for i, e in enumerate(employees):
            if e.id != employee_id:
                continue
            if name is None or name == e.name:
                return e
            employees[i] = Employee(id=employee_id, name=name)
            self._save(employees)
            return employees[i]

        employee = Employee(id=employee_id, name=name)
        employees.append(employee)
        self._save(employees)
        logger.info("Registered employee %s", employee_id)
        return employee

    def records_with(self, employee_id: str) -> list[dict] | None:
        """Employee records including employee_id, or None if already registered.
        Lets a caller fold the registration into its own commit."""
        employees = self.list_all()
        if any(e.id == employee_id for e in employees):
            return None
        employees.append(Employee(id=employee_id))
        return [employee_to_record(e) for e in employees]

    def _save(self, employees: list[Employee]) -> None:
        self.store.save_all(EMPLOYEES_COLLECTION, [employee_to_record(e) for e in employees])

"""
Capa operativa del día.
Responde: ¿qué pasa HOY para un empleado?
"""

from ridepool.application.ride_service import RideService
from ridepool.domain.models import DaySummary


def get_today(service: RideService, employee_id: str) -> DaySummary:
    """
    Day summary for one employee: the ride they publish, the rides they
    hold a seat on, and whether they may still publish today.
    """
    return DaySummary(
        date=service.today().isoformat(),
        employee_id=employee_id,
        my_rides=service.my_rides(employee_id),
        booked_rides=service.booked_rides(employee_id),
        can_publish=service.can_publish_today(employee_id),
    )


if __name__ == "__main__":
    from ridepool.domain.models import RideDraft, VehicleKind
    from ridepool.infrastructure.store import InMemoryStore

    demo = RideService(InMemoryStore())
    demo.publish_ride(
        RideDraft(
            owner_id="EMP001",
            vehicle_kind=VehicleKind.CAR,
            vehicle_tag="DL01AB1234",
            total_seats=3,
            departure_time="09:00",
            pickup_point="Office Main Gate",
            destination="Cyber City",
        )
    )
    ride_id = demo.list_todays_open_rides()[0].id
    print(demo.reserve(ride_id, "EMP002"))
    print("Driver day:")
    print(get_today(demo, "EMP001"))
    print()
    print("Passenger day:")
    print(get_today(demo, "EMP002"))

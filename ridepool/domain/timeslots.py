"""
Ridepool time utilities. Pure functions, "HH:MM" strings, minutes since midnight.
"""

from typing import Iterable, Optional

from ridepool.domain.models import Ride

DEFAULT_WINDOW_MIN = 60


def parse_hhmm(value: Optional[str]) -> Optional[str]:
    """Normaliza 'H:MM' / 'HH:MM' a 'HH:MM'. None si vacío o inválido."""
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        h, m = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if 0 <= h < 24 and 0 <= m < 60:
        return f"{h:02d}:{m:02d}"
    return None


def to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def is_within_time_range(ride_time: str, reference_time: str, window_minutes: int = DEFAULT_WINDOW_MIN) -> bool:
    """Inclusive: |ride - reference| <= window."""
    return abs(to_minutes(ride_time) - to_minutes(reference_time)) <= window_minutes


def has_time_conflict(
    rides: Iterable[Ride],
    employee_id: str,
    departure_time: str,
    service_date: str,
) -> bool:
    """
    Exact-minute match against every ride on service_date where the employee
    is the owner or holds a seat. Not windowed.
    """
    if not employee_id:
        return False
    target = to_minutes(departure_time)
    return any(
        ride.service_date == service_date
        and ride.involves(employee_id)
        and to_minutes(ride.departure_time) == target
        for ride in rides
    )


def format_display_time(value: str) -> str:
    """'13:05' -> '1:05 PM'."""
    hours, minutes = value.split(":")
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minutes} {suffix}"

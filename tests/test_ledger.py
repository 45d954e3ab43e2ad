from conftest import TODAY, YESTERDAY
from ridepool.domain import ledger, rejections


def test_publish_creates_ride_for_today(make_draft) -> None:
    outcome = ledger.publish([], make_draft(), TODAY, "R1")

    assert outcome.result.success
    ride = outcome.result.ride
    assert ride.id == "R1"
    assert ride.service_date == "2026-10-19"
    assert ride.reserved_by == ()
    assert ride.total_seats == 3
    assert outcome.transaction.rides == [ride]
    assert outcome.transaction.bookings is None


def test_publish_appends_in_storage_order(make_draft, make_ride) -> None:
    existing = make_ride(owner_id="EMP009")
    outcome = ledger.publish([existing], make_draft(), TODAY, "NEW")
    assert [r.id for r in outcome.transaction.rides] == [existing.id, "NEW"]


def test_publish_rejects_second_ride_same_day(make_draft) -> None:
    first = ledger.publish([], make_draft(departure_time="09:00"), TODAY, "R1")
    rides = first.transaction.rides

    second = ledger.publish(rides, make_draft(departure_time="18:00"), TODAY, "R2")

    assert not second.result.success
    assert second.result.error_code == rejections.ALREADY_PUBLISHED
    assert second.transaction is None


def test_publish_allowed_when_previous_ride_is_from_another_day(make_draft, make_ride) -> None:
    rides = [make_ride(owner_id="EMP001", service_date=YESTERDAY)]
    assert ledger.publish(rides, make_draft(), TODAY, "R2").result.success


def test_publish_rejects_time_conflict_with_reserved_seat(make_draft, make_ride) -> None:
    rides = [make_ride(owner_id="EMP002", departure_time="09:00", reserved_by=("EMP001",))]

    clash = ledger.publish(rides, make_draft(owner_id="EMP001", departure_time="09:00"), TODAY, "R2")
    assert clash.result.error_code == rejections.TIME_CONFLICT

    later = ledger.publish(rides, make_draft(owner_id="EMP001", departure_time="09:30"), TODAY, "R2")
    assert later.result.success


def test_publish_without_owner_is_rejected(make_draft) -> None:
    outcome = ledger.publish([], make_draft(owner_id=""), TODAY, "R1")
    assert outcome.result.error_code == rejections.NO_CALLER


def test_publish_does_not_check_vehicle_tag(make_draft, make_ride) -> None:
    rides = [make_ride(owner_id="EMP002", vehicle_tag="DL01AB1234")]
    outcome = ledger.publish(rides, make_draft(vehicle_tag="DL01AB1234", departure_time="10:00"), TODAY, "R2")
    assert outcome.result.success


def test_has_published_and_can_publish_are_negations(make_ride) -> None:
    rides = [make_ride(owner_id="EMP001")]
    assert ledger.has_published_today(rides, "EMP001", TODAY)
    assert not ledger.can_publish_today(rides, "EMP001", TODAY)
    assert not ledger.has_published_today(rides, "EMP002", TODAY)
    assert ledger.can_publish_today(rides, "EMP002", TODAY)
    assert not ledger.has_published_today(rides, "EMP001", YESTERDAY)


def test_has_published_today_without_caller(make_ride) -> None:
    assert not ledger.has_published_today([make_ride()], None, TODAY)


def test_vehicle_tag_availability_is_case_insensitive_and_daily(make_ride) -> None:
    rides = [
        make_ride(vehicle_tag="DL01AB1234"),
        make_ride(owner_id="EMP002", vehicle_tag="HR26CD5678", service_date=YESTERDAY),
    ]
    assert not ledger.is_vehicle_tag_available(rides, "dl01ab1234", TODAY)
    assert not ledger.is_vehicle_tag_available(rides, "DL 01 AB-1234", TODAY)
    assert ledger.is_vehicle_tag_available(rides, "HR26CD5678", TODAY)


def test_rides_owned_by(make_ride) -> None:
    mine = make_ride(owner_id="EMP001")
    rides = [mine, make_ride(owner_id="EMP002"), make_ride(owner_id="EMP001", service_date=YESTERDAY)]
    assert ledger.rides_owned_by(rides, "EMP001", TODAY) == [mine]


def test_at_most_one_ride_per_employee_per_day(make_draft) -> None:
    rides = []
    attempts = ["EMP001", "EMP002", "EMP001", "EMP003", "EMP002", "EMP001"]
    for i, owner in enumerate(attempts):
        outcome = ledger.publish(rides, make_draft(owner_id=owner, departure_time=f"{8 + i:02d}:00"), TODAY, f"R{i}")
        if outcome.transaction:
            rides = outcome.transaction.rides

    owners = [r.owner_id for r in rides]
    assert sorted(owners) == ["EMP001", "EMP002", "EMP003"]

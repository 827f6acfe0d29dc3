from datetime import date

import pytest

from src.fieldroute.models.domain import JobLocation, Vehicle
from src.fieldroute.schemas.settings import OptimizationSettings
from src.fieldroute.services.routing.models import TravelEstimate
from src.fieldroute.services.routing.timing import build_timed_route
from src.fieldroute.services.routing.travel import TravelTimeEstimator

ROUTE_DATE = date(2024, 3, 1)


class FixedProvider:
    def __init__(self, distance: float = 2.0, duration: float = 10.0) -> None:
        self.distance = distance
        self.duration = duration
        self.calls = []

    def travel_time(self, from_lat, from_lng, to_lat, to_lng, *, vehicle_class=None, timeout=None):
        self.calls.append((from_lat, from_lng, to_lat, to_lng, vehicle_class))
        return TravelEstimate(distance_miles=self.distance, duration_minutes=self.duration)


class FailingProvider:
    def travel_time(self, *args, **kwargs):
        raise RuntimeError("routing backend down")


def _vehicle() -> Vehicle:
    return Vehicle(
        id="V1",
        vehicle_number="T-01",
        vehicle_name="Truck 1",
        capacity=1000,
        home_base_lat=44.9778,
        home_base_lng=-93.2650,
        hourly_operating_cost=25.0,
        mileage_rate=0.65,
    )


def _job(job_id: str, duration: int = 60, miles_north: float = 2.0) -> JobLocation:
    return JobLocation(
        job_id=job_id,
        address=f"{job_id} Street",
        latitude=44.9778 + miles_north / 69.0977,
        longitude=-93.2650,
        estimated_duration=duration,
        priority=3,
    )


def test_single_job_schedule_and_totals():
    travel = TravelTimeEstimator(FixedProvider())
    route = build_timed_route(_vehicle(), [_job("J1")], ROUTE_DATE, "08:00", OptimizationSettings(), travel)

    stop = route.stops[0]
    # 10 min * 1.3 traffic * 1.15 buffer
    assert stop.travel_time_from_previous == 15
    assert stop.estimated_arrival == "08:15"
    assert stop.estimated_departure == "09:15"
    assert stop.distance_from_previous == 2.0
    assert stop.stop_order == 1
    # return leg gets the traffic multiplier only
    assert route.end_time == "09:28"
    assert route.total_duration == 88
    assert route.total_distance == pytest.approx(4.0)
    assert route.total_cost == pytest.approx(32.55)
    assert route.optimization_score == 78
    assert route.start_time == "08:00"
    assert route.route_date == ROUTE_DATE
    assert route.constraint_violations == {}


def test_vehicle_class_is_passed_to_the_provider():
    provider = FixedProvider()
    build_timed_route(_vehicle(), [_job("J1")], ROUTE_DATE, "08:00", OptimizationSettings(), TravelTimeEstimator(provider))
    assert [call[4] for call in provider.calls] == ["TRUCK", "TRUCK"]
    assert provider.calls[-1][2:4] == (44.9778, -93.2650)


def test_lunch_is_added_after_the_midpoint_inside_the_lunch_window():
    travel = TravelTimeEstimator(FixedProvider())
    jobs = [_job(f"J{idx}", duration=30) for idx in range(1, 4)]
    route = build_timed_route(_vehicle(), jobs, ROUTE_DATE, "11:00", OptimizationSettings(), travel)

    schedule = [(stop.estimated_arrival, stop.estimated_departure) for stop in route.stops]
    assert schedule == [("11:15", "11:45"), ("12:00", "12:30"), ("12:45", "14:15")]
    assert route.end_time == "14:28"
    assert route.total_duration == 208


def test_lunch_can_be_added_at_more_than_one_stop():
    travel = TravelTimeEstimator(FixedProvider(distance=0.5, duration=0.0))
    settings = OptimizationSettings(lunch_break_duration=10)
    jobs = [_job(f"J{idx}", duration=5) for idx in range(1, 6)]
    route = build_timed_route(_vehicle(), jobs, ROUTE_DATE, "12:00", settings, travel)

    assert [stop.estimated_departure for stop in route.stops] == ["12:05", "12:10", "12:15", "12:30", "12:45"]
    assert route.total_duration == 5 * 5 + 2 * 10


def test_stop_order_is_sequential():
    travel = TravelTimeEstimator(FixedProvider())
    jobs = [_job(f"J{idx}", duration=20) for idx in range(1, 6)]
    route = build_timed_route(_vehicle(), jobs, ROUTE_DATE, "08:00", OptimizationSettings(), travel)
    assert [stop.stop_order for stop in route.stops] == [1, 2, 3, 4, 5]
    assert route.job_ids == ["J1", "J2", "J3", "J4", "J5"]


def test_routes_compute_when_the_provider_always_fails():
    travel = TravelTimeEstimator(FailingProvider())
    jobs = [_job("J1", miles_north=3.0), _job("J2", miles_north=6.0)]
    route = build_timed_route(_vehicle(), jobs, ROUTE_DATE, "08:00", OptimizationSettings(), travel)

    assert route.total_distance > 0
    assert route.stops[0].distance_from_previous == pytest.approx(3.0, abs=0.01)
    assert travel.stats()["fallback_calls"] == 3


def test_overruns_are_reported_not_rejected():
    travel = TravelTimeEstimator(FixedProvider(distance=60.0, duration=90.0))
    settings = OptimizationSettings(max_route_distance=100.0, max_route_minutes=120)
    route = build_timed_route(_vehicle(), [_job("J1")], ROUTE_DATE, "08:00", settings, travel)

    assert len(route.stops) == 1
    assert route.constraint_violations["distance_miles"] == pytest.approx(20.0)
    assert route.constraint_violations["duration_min"] > 0

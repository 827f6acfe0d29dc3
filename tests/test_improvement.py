import pytest

from src.fieldroute.models.domain import JobLocation, Vehicle
from src.fieldroute.services.routing.improvement import route_distance, two_opt


def _vehicle() -> Vehicle:
    return Vehicle(
        id="V1",
        vehicle_number="T-01",
        vehicle_name="Truck 1",
        capacity=1000,
        home_base_lat=0.0,
        home_base_lng=0.0,
        hourly_operating_cost=25.0,
        mileage_rate=0.65,
    )


def _job(job_id: str, lng: float, lat: float = 0.0) -> JobLocation:
    return JobLocation(
        job_id=job_id,
        address=f"{job_id} Street",
        latitude=lat,
        longitude=lng,
        estimated_duration=30,
        priority=3,
    )


def test_short_routes_are_returned_unchanged():
    route = [_job("a", 0.3), _job("b", 0.1), _job("c", 0.2)]
    assert two_opt(route, _vehicle()) == route


def test_route_distance_closes_the_tour():
    vehicle = _vehicle()
    job = _job("a", 0.1)
    assert route_distance([job], vehicle) == pytest.approx(2 * 6.9098, abs=0.01)
    assert route_distance([], vehicle) == 0.0


def test_two_opt_untangles_a_zigzag_along_the_equator():
    vehicle = _vehicle()
    route = [_job("p1", 0.1), _job("p3", 0.3), _job("p2", 0.2), _job("p4", 0.4), _job("p5", 0.5)]

    improved = two_opt(route, vehicle)

    assert [job.job_id for job in improved] == ["p1", "p3", "p5", "p4", "p2"]
    assert route_distance(improved, vehicle) < route_distance(route, vehicle)


def test_two_opt_never_lengthens_and_keeps_the_first_stop():
    vehicle = _vehicle()
    coords = [(0.05, 0.02), (0.3, -0.1), (0.12, 0.2), (-0.08, 0.15), (0.25, 0.25), (0.0, -0.2), (0.18, 0.05)]
    route = [_job(f"J{idx}", lng, lat) for idx, (lng, lat) in enumerate(coords)]

    improved = two_opt(route, vehicle)

    assert improved[0] is route[0]
    assert sorted(job.job_id for job in improved) == sorted(job.job_id for job in route)
    assert route_distance(improved, vehicle) <= route_distance(route, vehicle) + 1e-9
    assert route == [_job(f"J{idx}", lng, lat) for idx, (lng, lat) in enumerate(coords)]

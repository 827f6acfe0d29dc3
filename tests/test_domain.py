import pytest

from src.fieldroute.models.domain import (
    InvalidInputError,
    JobLocation,
    TimeWindow,
    Vehicle,
    format_clock,
    parse_clock,
)


def _job(**overrides) -> JobLocation:
    fields = dict(
        job_id="J1",
        address="1 Main St",
        latitude=44.98,
        longitude=-93.27,
        estimated_duration=60,
        priority=3,
    )
    fields.update(overrides)
    return JobLocation(**fields)


def _vehicle(**overrides) -> Vehicle:
    fields = dict(
        id="V1",
        vehicle_number="T-01",
        vehicle_name="Truck 1",
        capacity=1000,
        home_base_lat=44.9778,
        home_base_lng=-93.2650,
        hourly_operating_cost=25.0,
        mileage_rate=0.65,
    )
    fields.update(overrides)
    return Vehicle(**fields)


def test_parse_clock_accepts_one_or_two_digit_hours():
    assert parse_clock("08:00") == 480
    assert parse_clock("8:05") == 485
    assert parse_clock("23:59") == 1439


@pytest.mark.parametrize("value", ["24:00", "12:60", "8am", "", "08:0"])
def test_parse_clock_rejects_malformed_values(value):
    with pytest.raises(InvalidInputError):
        parse_clock(value)


def test_format_clock_does_not_wrap_past_midnight():
    assert format_clock(485) == "08:05"
    assert format_clock(1530) == "25:30"


def test_invalid_input_error_is_a_value_error():
    assert issubclass(InvalidInputError, ValueError)


@pytest.mark.parametrize(
    "overrides",
    [
        {"job_id": ""},
        {"latitude": 91.0},
        {"longitude": -181.0},
        {"latitude": float("nan")},
        {"estimated_duration": 0},
        {"estimated_duration": 45.5},
        {"estimated_duration": True},
        {"priority": 0},
        {"priority": 6},
        {"priority": 2.5},
    ],
)
def test_job_location_rejects_invalid_fields(overrides):
    with pytest.raises(InvalidInputError):
        _job(**overrides)


def test_time_window_requires_earliest_before_latest():
    assert TimeWindow("09:00", "11:00").earliest == "09:00"
    with pytest.raises(InvalidInputError):
        TimeWindow("11:00", "09:00")


def test_vehicle_rejects_negative_costs_and_exposes_home_base():
    vehicle = _vehicle()
    assert vehicle.home_base == (44.9778, -93.2650)
    with pytest.raises(InvalidInputError):
        _vehicle(mileage_rate=-0.1)
    with pytest.raises(InvalidInputError):
        _vehicle(home_base_lat=120.0)

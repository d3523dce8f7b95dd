from decimal import Decimal

import pytest

from src.timetable.calculator import (
    build_schedule, journey_between, route_distance, route_segment, route_travel_time,
    segment_distance
)
from src.timetable.schemas import RouteStopInput, UNKNOWN_TIME


def _stop(station_id, sequence, distance_to_next=None):
    return {"station_id": station_id, "sequence": sequence, "distance_to_next": distance_to_next}


@pytest.fixture
def three_stops():
    return [_stop("A", 0, 150), _stop("B", 1, 200), _stop("C", 2, 0)]


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def test_two_stop_route_arrival():
    stops = [_stop("A", 0, 500), _stop("B", 1, 0)]

    schedule = build_schedule(stops, "08:00", 100, 10)

    assert schedule[1].arrival_time == "13:00"
    assert schedule[1].departure_time is None


def test_three_stop_route_times(three_stops):
    schedule = build_schedule(three_stops, "06:00", 60, 10)

    assert [entry.station_id for entry in schedule] == ["A", "B", "C"]
    assert schedule[0].arrival_time == schedule[0].departure_time == "06:00"
    assert schedule[1].arrival_time == "08:30"
    assert schedule[1].departure_time == "08:40"
    assert schedule[2].arrival_time == "12:00"
    assert schedule[2].departure_time is None


def test_schedule_tracks_cumulative_distance_and_offsets(three_stops):
    schedule = build_schedule(three_stops, "06:00", 60, 10)

    assert [entry.distance_from_origin_km for entry in schedule] == [0, 150, 350]
    assert [entry.arrival_offset_minutes for entry in schedule] == [0, 150, 360]
    assert [entry.departure_offset_minutes for entry in schedule] == [0, 160, None]


def test_schedule_is_index_aligned_with_stops():
    stops = [_stop(f"S{i}", i * 10, 40 + i) for i in range(7)]

    schedule = build_schedule(stops, "05:15", 80, 10)

    assert len(schedule) == len(stops)
    for stop, entry in zip(stops, schedule):
        assert entry.station_id == stop["station_id"]
        assert entry.sequence == stop["sequence"]


def test_intermediate_stops_hold_for_dwell_time():
    stops = [_stop(f"S{i}", i, 55) for i in range(6)]

    schedule = build_schedule(stops, "21:00", 75, 12)

    for entry in schedule[1:-1]:
        assert entry.departure_offset_minutes - entry.arrival_offset_minutes == 12
        held = (_minutes(entry.departure_time) - _minutes(entry.arrival_time)) % (24 * 60)
        assert held == 12


def test_departures_never_go_backwards_along_route():
    stops = [_stop(i, i, 35 * (i + 1)) for i in range(8)]

    schedule = build_schedule(stops, "22:10", 90, 10)

    offsets = [entry.departure_offset_minutes for entry in schedule[:-1]]
    assert offsets == sorted(offsets)
    assert schedule[-1].arrival_offset_minutes > offsets[-1]


def test_schedule_is_recomputed_identically(three_stops):
    first = build_schedule(three_stops, "06:00", 60, 10)
    second = build_schedule(three_stops, "06:00", 60, 10)

    assert first == second
    assert three_stops[1] == _stop("B", 1, 200)


def test_overnight_arrival_wraps_clock():
    stops = [_stop("X", 0, 90), _stop("Y", 1)]

    schedule = build_schedule(stops, "23:30", 60, 10)

    assert schedule[1].arrival_time == "01:00"
    assert schedule[1].arrival_offset_minutes == 90


def test_missing_distance_means_no_running_time():
    stops = [_stop("A", 0, None), _stop("B", 1, 60), _stop("C", 2)]

    schedule = build_schedule(stops, "10:00", 60, 10)

    assert schedule[1].arrival_time == "10:00"
    assert schedule[1].departure_time == "10:10"
    assert schedule[2].arrival_time == "11:10"


def test_zero_distance_stop_arrives_at_previous_departure():
    stops = [_stop("A", 0, 0), _stop("B", 1, 60), _stop("C", 2)]

    schedule = build_schedule(stops, "10:00", 60, 10)

    assert schedule[1].arrival_time == schedule[0].departure_time == "10:00"
    assert schedule[1].departure_time == "10:10"
    assert schedule[1].distance_from_origin_km == 0
    assert schedule[2].arrival_time == "11:10"
    assert schedule[2].arrival_offset_minutes == 70


def test_fractional_dwell_rounds_to_whole_minutes():
    stops = [_stop("A", 0, 60), _stop("B", 1, 60), _stop("C", 2)]

    schedule = build_schedule(stops, "06:00", 60, 7.5)

    assert schedule[1].arrival_time == "07:00"
    assert schedule[1].departure_time == "07:08"
    assert schedule[1].departure_offset_minutes == 68
    assert schedule[2].arrival_time == "08:08"
    assert route_travel_time(stops, 60, 7.5).total_minutes == 128


def test_unreadable_start_time_degrades_every_time(three_stops):
    schedule = build_schedule(three_stops, "soon", 60, 10)

    assert len(schedule) == 3
    assert all(entry.arrival_time == UNKNOWN_TIME for entry in schedule)
    assert schedule[1].departure_time == UNKNOWN_TIME
    assert schedule[2].arrival_offset_minutes == 360


def test_missing_speed_keeps_train_at_start_time(three_stops):
    schedule = build_schedule(three_stops, "06:00", None, 10)

    assert schedule[1].arrival_time == "06:00"
    assert schedule[2].arrival_time == "06:10"


def test_empty_and_single_stop_routes():
    assert build_schedule([], "06:00", 60, 10) == []

    schedule = build_schedule([_stop("A", 0, 100)], "06:00", 60, 10)
    assert len(schedule) == 1
    assert schedule[0].arrival_time == schedule[0].departure_time == "06:00"


def test_dwell_defaults_to_configured_value(three_stops):
    schedule = build_schedule(three_stops, "06:00", 60)

    assert schedule[1].departure_time == "08:40"


def test_accepts_model_inputs():
    stops = [
        RouteStopInput(station_id=1, sequence=1, distance_to_next=Decimal("120")),
        RouteStopInput(station_id=2, sequence=2),
    ]

    schedule = build_schedule(stops, "07:00", 120, 10)

    assert schedule[1].station_id == 2
    assert schedule[1].arrival_time == "08:00"


def test_route_distance_and_travel_time(three_stops):
    assert route_distance(three_stops) == Decimal("350")

    total = route_travel_time(three_stops, 60, 10)
    assert total.total_minutes == 360
    assert total.display == "6h 0m"


def test_route_travel_time_needs_speed_and_two_stops(three_stops):
    assert route_travel_time(three_stops, 0, 10).display == UNKNOWN_TIME
    assert route_travel_time(three_stops[:1], 60, 10).total_minutes == 0


def test_journey_over_full_route(three_stops):
    journey = journey_between(three_stops, "A", "C", "06:00", 60, 2, 10)

    assert journey.departure_time == "06:00"
    assert journey.arrival_time == "12:00"
    assert journey.distance_km == Decimal("350")
    assert journey.price == 700
    assert journey.duration.total_minutes == 360
    assert [entry.station_id for entry in journey.stops] == ["A", "B", "C"]


def test_journey_from_intermediate_stop(three_stops):
    journey = journey_between(three_stops, "B", "C", "06:00", 60, 2, 10)

    assert journey.departure_time == "08:40"
    assert journey.arrival_time == "12:00"
    assert journey.distance_km == Decimal("200")
    assert journey.duration.display == "3h 20m"


def test_journey_times_match_full_schedule(three_stops):
    schedule = build_schedule(three_stops, "06:00", 60, 10)
    journey = journey_between(three_stops, "A", "B", "06:00", 60, 2, 10)

    assert journey.departure_time == schedule[0].departure_time
    assert journey.arrival_time == schedule[1].arrival_time
    assert journey.stops == schedule[0:2]


@pytest.mark.parametrize(
    "origin, destination",
    [("B", "A"), ("C", "A"), ("B", "B"), ("A", "Z"), ("Z", "C")],
)
def test_journey_not_travelable(three_stops, origin, destination):
    assert journey_between(three_stops, origin, destination, "06:00", 60, 2, 10) is None


def test_journey_distance_excludes_destination_segment():
    stops = [_stop("A", 0, 100), _stop("B", 1, 50), _stop("C", 2, 70), _stop("D", 3)]

    journey = journey_between(stops, "A", "C", "06:00", 100, 1, 10)

    assert journey.distance_km == Decimal("150")
    assert journey.price == 150


def test_journey_price_rounds_to_whole_units():
    stops = [_stop("A", 0, 350.4), _stop("B", 1, 0)]

    journey = journey_between(stops, "A", "B", "06:00", 120, 2.5, 10)

    assert journey.distance_km == Decimal("350.4")
    assert journey.price == 876


def test_journey_across_midnight():
    stops = [_stop("X", 0, 90), _stop("Y", 1)]

    journey = journey_between(stops, "X", "Y", "23:30", 60, 1, 10)

    assert journey.arrival_time == "01:00"
    assert journey.duration.total_minutes == 90


def test_journey_with_incomplete_train_data_still_resolves(three_stops):
    journey = journey_between(three_stops, "A", "C", None, None, None, 10)

    assert journey.departure_time == UNKNOWN_TIME
    assert journey.arrival_time == UNKNOWN_TIME
    assert journey.price == 0
    assert journey.duration.total_minutes == 0


def test_station_ids_match_across_types():
    stops = [_stop(1, 0, 60), _stop(2, 1)]

    journey = journey_between(stops, "1", "2", "09:00", 60, 1, 10)

    assert journey.origin_station_id == 1
    assert journey.arrival_time == "10:00"


def test_route_segment_and_distance(three_stops):
    segment = route_segment(three_stops, "B", "C")

    assert [stop["station_id"] for stop in segment] == ["B", "C"]
    assert segment_distance(three_stops, "A", "C") == Decimal("350")
    assert segment_distance(three_stops, "C", "A") == Decimal("0")
    assert route_segment(three_stops, "C", "B") is None

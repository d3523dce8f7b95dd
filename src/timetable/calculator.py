"""
Timetable calculator.

Pure functions over a train's ordered stop list: per-stop arrival and
departure times, and timing, distance and fare for a leg between two stops.
Stops may be pydantic models, ORM rows or plain mappings carrying
``station_id``, ``sequence`` and ``distance_to_next``; they are expected in
route order and are never modified.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple
from decimal import Decimal

from src.config import settings
from src.timetable.clock import (
    Number, TimeValue, add_minutes, format_time, make_duration, round_half_up,
    to_decimal, travel_duration, travel_minutes
)
from src.timetable.schemas import Journey, StopSchedule, TravelDuration, UNKNOWN_TIME

logger = logging.getLogger(__name__)


def _field(stop: Any, name: str) -> Any:
    if isinstance(stop, Mapping):
        return stop.get(name)
    return getattr(stop, name, None)


def _distance_to_next(stop: Any) -> Decimal:
    """Distance recorded on a stop, 0 when missing or negative"""
    distance = to_decimal(_field(stop, "distance_to_next"))
    if distance is None or distance < 0:
        return Decimal("0")
    return distance


def _same_station(left: Any, right: Any) -> bool:
    return left == right or str(left) == str(right)


def _position(stops: Sequence[Any], station_id: Any) -> Optional[int]:
    for index, stop in enumerate(stops):
        if _same_station(_field(stop, "station_id"), station_id):
            return index
    return None


def build_schedule(
    stops: Sequence[Any],
    start_time: TimeValue,
    speed_kmh: Optional[Number],
    dwell_minutes: Optional[Number] = None
) -> List[StopSchedule]:
    """
    Arrival and departure times at every stop of a route.

    The first stop departs at ``start_time``. Each following stop is reached
    after the running time over the previous stop's ``distance_to_next``; a
    missing or zero distance means no running time. Intermediate stops hold
    the train for ``dwell_minutes``. The last stop has no departure.

    Never raises for incomplete input: an unreadable start time turns every
    time into ``UNKNOWN_TIME`` and a missing speed means no running time.
    """
    route = list(stops)
    if not route:
        return []

    # Offsets are whole minutes
    dwell = max(0, round_half_up(settings.DWELL_MINUTES if dwell_minutes is None else dwell_minutes))
    start = format_time(start_time)
    if start == UNKNOWN_TIME:
        logger.debug("Start time %r is not readable, schedule degraded", start_time)

    last_index = len(route) - 1
    schedule: List[StopSchedule] = []

    departure_time: Optional[str] = start
    departure_offset: Optional[int] = 0
    distance_from_origin = Decimal("0")

    for index, stop in enumerate(route):
        if index == 0:
            arrival_time, arrival_offset = start, 0
        else:
            distance = _distance_to_next(route[index - 1])
            minutes = travel_minutes(distance, speed_kmh)
            arrival_time = format_time(add_minutes(departure_time, minutes))
            arrival_offset = departure_offset + minutes
            distance_from_origin += distance

        if index == 0:
            departure_time, departure_offset = arrival_time, arrival_offset
        elif index == last_index:
            departure_time, departure_offset = None, None
        else:
            departure_time = format_time(add_minutes(arrival_time, dwell))
            departure_offset = arrival_offset + dwell

        schedule.append(StopSchedule(
            station_id=_field(stop, "station_id"),
            sequence=_field(stop, "sequence"),
            arrival_time=arrival_time,
            departure_time=departure_time,
            distance_from_origin_km=distance_from_origin,
            arrival_offset_minutes=arrival_offset,
            departure_offset_minutes=departure_offset
        ))

    return schedule


def route_distance(stops: Sequence[Any]) -> Decimal:
    """Length of the whole route in km"""
    route = list(stops)
    return sum((_distance_to_next(stop) for stop in route[:-1]), Decimal("0"))


def route_travel_time(
    stops: Sequence[Any],
    speed_kmh: Optional[Number],
    dwell_minutes: Optional[Number] = None
) -> TravelDuration:
    """End-to-end running time of a route, intermediate halts included"""
    route = list(stops)
    speed = to_decimal(speed_kmh)
    if len(route) < 2 or not speed or speed <= 0:
        return TravelDuration()

    # Offsets do not depend on the start time
    schedule = build_schedule(route, "00:00", speed, dwell_minutes)
    return make_duration(schedule[-1].arrival_offset_minutes)


def _resolve_leg(stops: Sequence[Any], origin_station_id: Any, destination_station_id: Any) -> Optional[Tuple[int, int]]:
    origin = _position(stops, origin_station_id)
    destination = _position(stops, destination_station_id)

    if origin is None or destination is None:
        logger.debug(
            "Station %r or %r is not on the route", origin_station_id, destination_station_id
        )
        return None
    if origin >= destination:
        logger.debug(
            "Station %r does not precede %r on the route", origin_station_id, destination_station_id
        )
        return None
    return origin, destination


def route_segment(stops: Sequence[Any], origin_station_id: Any, destination_station_id: Any) -> Optional[List[Any]]:
    """Stops from origin to destination inclusive, None when not travelable"""
    route = list(stops)
    leg = _resolve_leg(route, origin_station_id, destination_station_id)
    if leg is None:
        return None
    origin, destination = leg
    return route[origin:destination + 1]


def segment_distance(stops: Sequence[Any], origin_station_id: Any, destination_station_id: Any) -> Decimal:
    """Distance between two stations of a route in km, 0 when not travelable"""
    segment = route_segment(stops, origin_station_id, destination_station_id)
    if not segment:
        return Decimal("0")
    return route_distance(segment)


def journey_between(
    stops: Sequence[Any],
    origin_station_id: Any,
    destination_station_id: Any,
    start_time: TimeValue,
    speed_kmh: Optional[Number],
    price_per_km: Optional[Number],
    dwell_minutes: Optional[Number] = None
) -> Optional[Journey]:
    """
    Departure, arrival, duration, distance and fare for one leg of a route.

    Returns None when either station is not on the route or the origin does
    not come strictly before the destination; routes run in one direction.
    Times come from the full-route schedule, so the result matches the
    timetable shown for the whole train.
    """
    route = list(stops)
    leg = _resolve_leg(route, origin_station_id, destination_station_id)
    if leg is None:
        return None
    origin, destination = leg

    schedule = build_schedule(route, start_time, speed_kmh, dwell_minutes)
    distance = route_distance(route[origin:destination + 1])
    rate = to_decimal(price_per_km) or Decimal("0")

    departure_time = schedule[origin].departure_time
    arrival_time = schedule[destination].arrival_time

    return Journey(
        origin_station_id=_field(route[origin], "station_id"),
        destination_station_id=_field(route[destination], "station_id"),
        departure_time=departure_time,
        arrival_time=arrival_time,
        distance_km=distance,
        price=round_half_up(distance * rate),
        duration=travel_duration(departure_time, arrival_time),
        stops=schedule[origin:destination + 1]
    )

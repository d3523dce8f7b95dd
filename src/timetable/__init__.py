"""
Timetable Module

Computes when a train reaches and leaves each stop of its route, and what a
rider's leg between two stops costs. It includes:

- Wall-clock arithmetic with a single midnight rollover
- Per-stop arrival/departure with a fixed halt at intermediate stations
- Origin to destination timing, distance and fare

Key Components:
- clock.py: Time parsing, formatting, addition and durations
- calculator.py: Pure schedule and journey calculations over a stop list
- service.py: Timetables and journeys for stored trains
- router.py: FastAPI endpoints for timetables, journeys and live previews
- schemas.py: Pydantic models for calculator inputs and results

The calculator has no state and does no I/O; the router and service are
imported from their modules directly.
"""

from .calculator import (
    build_schedule, journey_between, route_distance, route_segment,
    route_travel_time, segment_distance
)
from .clock import (
    add_minutes, format_time, parse_time, travel_duration, travel_minutes
)
from .schemas import (
    UNKNOWN_TIME, Journey, RouteStopInput, StopSchedule, TrainParameters,
    TravelDuration
)

__all__ = [
    "build_schedule",
    "journey_between",
    "route_distance",
    "route_segment",
    "route_travel_time",
    "segment_distance",
    "add_minutes",
    "format_time",
    "parse_time",
    "travel_duration",
    "travel_minutes",
    "UNKNOWN_TIME",
    "Journey",
    "RouteStopInput",
    "StopSchedule",
    "TrainParameters",
    "TravelDuration"
]

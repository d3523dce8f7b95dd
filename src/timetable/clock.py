"""
Wall-clock arithmetic used by the timetable calculator.

Times travel through the system as ``HH:MM`` text. Anything that cannot be
read as a time becomes ``UNKNOWN_TIME`` instead of raising, so a half-edited
route still renders.
"""

from typing import Optional, Tuple, Union
from datetime import time, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from src.timetable.schemas import TravelDuration, UNKNOWN_TIME

MINUTES_PER_DAY = 24 * 60

Number = Union[int, float, Decimal, str]
TimeValue = Union[str, time, datetime, None]


def to_decimal(value) -> Optional[Decimal]:
    """Coerce a numeric-ish value to Decimal, None when it is not a number"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero"""
    number = to_decimal(value)
    if number is None:
        return 0
    return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_time(value: TimeValue) -> Optional[Tuple[int, int]]:
    """Read a time as (hour, minute); seconds and fractions are dropped"""
    if value is None:
        return None
    if isinstance(value, (time, datetime)):
        return value.hour, value.minute
    if not isinstance(value, str):
        return None

    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hour = int(parts[0])
        minute = int(parts[1].split(".")[0])
    except ValueError:
        return None

    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour, minute


def format_time(value: TimeValue) -> str:
    parsed = parse_time(value)
    if parsed is None:
        return UNKNOWN_TIME
    hour, minute = parsed
    return f"{hour:02d}:{minute:02d}"


def to_minutes(value: TimeValue) -> Optional[int]:
    """Minutes since midnight"""
    parsed = parse_time(value)
    if parsed is None:
        return None
    return parsed[0] * 60 + parsed[1]


def add_minutes(value: TimeValue, minutes_to_add: Optional[Number]) -> str:
    """
    Shift a wall-clock time forward, wrapping silently past midnight.

    Fractional minutes are rounded to the nearest whole minute first.
    """
    start = to_minutes(value)
    if start is None:
        return UNKNOWN_TIME

    total = (start + round_half_up(minutes_to_add or 0)) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def make_duration(total_minutes: int) -> TravelDuration:
    hours, minutes = divmod(total_minutes, 60)
    return TravelDuration(
        hours=hours,
        minutes=minutes,
        total_minutes=total_minutes,
        display=f"{hours}h {minutes}m"
    )


def travel_duration(start: TimeValue, end: TimeValue) -> TravelDuration:
    """
    Elapsed time from start to end.

    An end earlier than the start is read as the next day (one midnight
    crossing at most).
    """
    start_minutes = to_minutes(start)
    end_minutes = to_minutes(end)
    if start_minutes is None or end_minutes is None:
        return TravelDuration()

    diff = end_minutes - start_minutes
    if diff < 0:
        diff += MINUTES_PER_DAY
    return make_duration(diff)


def travel_minutes(distance_km: Optional[Number], speed_kmh: Optional[Number]) -> int:
    """Running time over a distance at an average speed, in whole minutes"""
    distance = to_decimal(distance_km)
    speed = to_decimal(speed_kmh)
    if not distance or not speed or distance < 0 or speed <= 0:
        return 0
    return round_half_up(distance * 60 / speed)

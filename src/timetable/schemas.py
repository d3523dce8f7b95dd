from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from decimal import Decimal

UNKNOWN_TIME = "--:--"

StationRef = Union[int, str]

# Calculator inputs
class RouteStopInput(BaseModel):
    """One row of a route as entered in the admin route editor"""
    station_id: StationRef
    sequence: int
    distance_to_next: Optional[Decimal] = Field(None, ge=0)  # km to the next stop

class TrainParameters(BaseModel):
    """Train attributes the timetable is computed from"""
    start_time: Optional[str] = None  # HH:MM departure from the first stop
    speed_kmh: Optional[Decimal] = None
    price_per_km: Decimal = Decimal("0")

# Calculator outputs
class TravelDuration(BaseModel):
    """Elapsed time between two wall-clock times"""
    hours: int = 0
    minutes: int = 0
    total_minutes: int = 0
    display: str = UNKNOWN_TIME

class StopSchedule(BaseModel):
    """Arrival and departure at one stop of a route"""
    station_id: StationRef
    station_name: Optional[str] = None
    sequence: Optional[int] = None
    arrival_time: str
    departure_time: Optional[str] = None  # None on the last stop
    distance_from_origin_km: Decimal = Decimal("0")
    arrival_offset_minutes: int = 0  # Minutes since the start time, never wrapped
    departure_offset_minutes: Optional[int] = None

class Journey(BaseModel):
    """Timing, distance and fare for a rider's leg between two stops"""
    origin_station_id: StationRef
    destination_station_id: StationRef
    departure_time: str
    arrival_time: str
    distance_km: Decimal
    price: int
    duration: TravelDuration
    stops: List[StopSchedule] = []

# API models
class TimetablePreviewRequest(BaseModel):
    """Unsaved route and train parameters from the admin route editor"""
    stops: List[RouteStopInput] = Field(..., min_length=1)
    start_time: Optional[str] = None
    speed_kmh: Optional[Decimal] = None
    dwell_minutes: Optional[int] = Field(None, ge=0)

    @field_validator("stops")
    @classmethod
    def check_unique_sequences(cls, stops):
        sequences = [stop.sequence for stop in stops]
        if len(set(sequences)) != len(sequences):
            raise ValueError("Stop sequence numbers must be unique within a route")
        return stops

class TimetablePreview(BaseModel):
    schedule: List[StopSchedule]
    total_travel_time: TravelDuration
    total_distance_km: Decimal

class TrainTimetable(BaseModel):
    """Stored train with its computed timetable"""
    train_id: int
    train_name: str
    train_number: Optional[str] = None
    start_time: str
    speed_kmh: Decimal
    price_per_km: Decimal
    dwell_minutes: int
    schedule: List[StopSchedule]
    total_travel_time: TravelDuration
    total_distance_km: Decimal

class TrainJourney(BaseModel):
    """Search result: one train serving the requested leg"""
    train_id: int
    train_name: str
    train_number: Optional[str] = None
    available_seats: int
    origin_station_name: Optional[str] = None
    destination_station_name: Optional[str] = None
    journey: Journey
    currency: str

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from src.timetable.clock import parse_time, format_time

def _normalize_start_time(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if parse_time(value) is None:
        raise ValueError("start_time must be a time of day as HH:MM")
    return format_time(value)

class TrainBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    number: Optional[str] = Field(None, max_length=50)
    start_time: str  # HH:MM departure from the first stop
    speed_kmh: Decimal = Field(..., gt=0)
    price_per_km: Decimal = Field(Decimal("0"), ge=0)
    available_seats: int = Field(0, ge=0)
    is_active: bool = True

    @field_validator("start_time")
    @classmethod
    def check_start_time(cls, value):
        return _normalize_start_time(value)

class TrainCreate(TrainBase):
    pass

class TrainUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    number: Optional[str] = Field(None, max_length=50)
    start_time: Optional[str] = None
    speed_kmh: Optional[Decimal] = Field(None, gt=0)
    price_per_km: Optional[Decimal] = Field(None, ge=0)
    available_seats: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("start_time")
    @classmethod
    def check_start_time(cls, value):
        return _normalize_start_time(value)

class Train(BaseModel):
    id: int
    name: str
    number: Optional[str] = None
    start_time: Optional[str] = None
    speed_kmh: Optional[Decimal] = None
    price_per_km: Optional[Decimal] = None
    available_seats: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class TrainListResponse(BaseModel):
    trains: List[Train]
    total: int
    page: int
    per_page: int

# Route stops
class RouteStopCreate(BaseModel):
    station_id: int
    sequence: Optional[int] = Field(None, ge=0)  # Appended after the last stop when omitted
    distance_to_next: Optional[Decimal] = Field(None, ge=0)

class RouteStopUpdate(BaseModel):
    station_id: Optional[int] = None
    sequence: Optional[int] = Field(None, ge=0)
    distance_to_next: Optional[Decimal] = Field(None, ge=0)

class RouteStop(BaseModel):
    id: int
    train_id: int
    station_id: int
    station_name: Optional[str] = None
    sequence: int
    distance_to_next: Optional[Decimal] = None

    model_config = ConfigDict(from_attributes=True)

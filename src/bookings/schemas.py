from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

class PaymentMethod(str, Enum):
    """Payment method enumeration"""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"

# Booking Request Models
class TicketBookingRequest(BaseModel):
    """Request to book one seat on a train between two of its stations"""
    train_id: int
    origin_station_id: int
    destination_station_id: int
    passenger_name: str = Field(..., min_length=1, max_length=255)
    travel_date: Optional[date] = None
    payment_method: PaymentMethod = PaymentMethod.CASH

class PaymentStatusUpdate(BaseModel):
    """Admin verification of a ticket's payment"""
    payment_status: PaymentStatus

# Response Models
class Ticket(BaseModel):
    id: int
    booking_code: str
    train_id: int
    train_name: Optional[str] = None
    origin_station_id: int
    origin_station_name: Optional[str] = None
    destination_station_id: int
    destination_station_name: Optional[str] = None
    passenger_name: str
    travel_date: Optional[date] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    distance_km: Decimal
    price: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class TicketListResponse(BaseModel):
    tickets: List[Ticket]
    total: int
    page: int
    per_page: int

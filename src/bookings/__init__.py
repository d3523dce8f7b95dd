"""
Ticket Booking Module

Seat booking on a train leg and ticket verification:

- service.py: prices a leg from the timetable, takes a seat and issues the ticket; lookup by code; payment status
- router.py: FastAPI endpoints for booking and verification
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .service import TicketService
from .schemas import (
    PaymentMethod, PaymentStatus, PaymentStatusUpdate,
    Ticket, TicketBookingRequest, TicketListResponse
)

__all__ = [
    "router",
    "TicketService",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentStatusUpdate",
    "Ticket",
    "TicketBookingRequest",
    "TicketListResponse"
]

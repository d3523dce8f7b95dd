from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from src.database import get_db
from src.bookings.schemas import (
    PaymentStatus, PaymentStatusUpdate, Ticket, TicketBookingRequest, TicketListResponse
)
from src.bookings.service import TicketService

router = APIRouter()

@router.post("/", response_model=Ticket, status_code=status.HTTP_201_CREATED)
def book_ticket(request: TicketBookingRequest, db: Session = Depends(get_db)):
    """Book one seat between two stations of a train"""
    if request.origin_station_id == request.destination_station_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Origin and destination must be different stations"
        )

    try:
        ticket = TicketService(db).book_ticket(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Train with ID {request.train_id} not found"
        )
    return ticket

@router.get("/", response_model=TicketListResponse)
def get_tickets(
    skip: int = Query(0, ge=0, description="Number of tickets to skip"),
    limit: int = Query(50, ge=1, le=200, description="Number of tickets to return"),
    train_id: Optional[int] = Query(None, description="Only tickets on this train"),
    payment_status: Optional[PaymentStatus] = Query(None, description="Only tickets with this payment status"),
    db: Session = Depends(get_db)
):
    """All issued tickets, for the bookings overview"""
    tickets, total = TicketService(db).get_tickets(
        skip=skip, limit=limit, train_id=train_id, payment_status=payment_status
    )

    return TicketListResponse(
        tickets=[Ticket.model_validate(ticket) for ticket in tickets],
        total=total,
        page=(skip // limit) + 1,
        per_page=limit
    )

@router.get("/code/{booking_code}", response_model=Ticket)
def get_ticket_by_code(booking_code: str, db: Session = Depends(get_db)):
    """Look up a ticket by its booking code for verification"""
    ticket = TicketService(db).get_ticket_by_code(booking_code)
    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found"
        )
    return ticket

@router.get("/{ticket_id}", response_model=Ticket)
def get_ticket(ticket_id: int, db: Session = Depends(get_db)):
    """Get ticket by ID"""
    ticket = TicketService(db).get_ticket(ticket_id)
    if not ticket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return ticket

@router.put("/{ticket_id}/payment-status", response_model=Ticket)
def update_payment_status(
    ticket_id: int,
    update_data: PaymentStatusUpdate,
    db: Session = Depends(get_db)
):
    """Mark a ticket paid, failed or refunded after verification"""
    ticket = TicketService(db).update_payment_status(ticket_id, update_data)
    if not ticket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return ticket

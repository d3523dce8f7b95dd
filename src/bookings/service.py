import logging
import secrets
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload

from src.models import Ticket, Train
from src.bookings.schemas import PaymentStatus, PaymentStatusUpdate, TicketBookingRequest
from src.timetable.service import TimetableService
from src.trains.service import TrainService

logger = logging.getLogger(__name__)

class TicketService:
    """Books seats on a train leg and looks up issued tickets"""

    def __init__(self, db: Session):
        self.db = db
        self.timetable_service = TimetableService(db)

    def _ticket_query(self):
        return self.db.query(Ticket).options(
            joinedload(Ticket.train),
            joinedload(Ticket.origin_station),
            joinedload(Ticket.destination_station)
        )

    def book_ticket(self, request: TicketBookingRequest) -> Optional[Ticket]:
        """
        Issue a ticket for one seat between two stations of a train.

        The fare and times are taken from the train's timetable at booking
        time. The seat is taken in the same transaction as the ticket is
        written, so the seat count never drops below zero. Returns None when
        the train does not exist; raises ValueError when it cannot be booked.
        """
        train = TrainService.get_train_by_id(self.db, request.train_id)
        if not train:
            return None

        if not train.is_active:
            raise ValueError(f"Train {train.name} is not in service")

        journey = self.timetable_service.get_journey(
            train.id, request.origin_station_id, request.destination_station_id
        )
        if journey is None:
            raise ValueError("No valid journey for this selection")

        taken = self.db.query(Train).filter(
            Train.id == train.id,
            Train.available_seats > 0
        ).update(
            {Train.available_seats: Train.available_seats - 1},
            synchronize_session=False
        )
        if not taken:
            self.db.rollback()
            logger.warning("Refused booking on train %s: no seats left", train.id)
            raise ValueError("No seats available on this train")

        ticket = Ticket(
            booking_code=self._generate_booking_code(),
            train_id=train.id,
            origin_station_id=request.origin_station_id,
            destination_station_id=request.destination_station_id,
            passenger_name=request.passenger_name.strip(),
            travel_date=request.travel_date,
            departure_time=journey.departure_time,
            arrival_time=journey.arrival_time,
            distance_km=journey.distance_km,
            price=journey.price,
            payment_method=request.payment_method.value,
            payment_status=PaymentStatus.PENDING.value
        )

        self.db.add(ticket)
        self.db.commit()

        logger.info(
            "Booked ticket %s on train %s from station %s to %s",
            ticket.booking_code, train.id, request.origin_station_id, request.destination_station_id
        )
        return self.get_ticket(ticket.id)

    def get_ticket(self, ticket_id: int) -> Optional[Ticket]:
        return self._ticket_query().filter(Ticket.id == ticket_id).first()

    def get_ticket_by_code(self, booking_code: str) -> Optional[Ticket]:
        """Ticket for the code printed on it, as entered at verification"""
        code = booking_code.strip().upper()
        return self._ticket_query().filter(Ticket.booking_code == code).first()

    def get_tickets(
        self,
        skip: int = 0,
        limit: int = 50,
        train_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None
    ) -> Tuple[List[Ticket], int]:
        """Issued tickets, newest first"""
        tickets_query = self._ticket_query()

        if train_id is not None:
            tickets_query = tickets_query.filter(Ticket.train_id == train_id)
        if payment_status is not None:
            tickets_query = tickets_query.filter(Ticket.payment_status == payment_status.value)

        total = tickets_query.count()
        tickets = tickets_query.order_by(Ticket.id.desc()).offset(skip).limit(limit).all()

        return tickets, total

    def update_payment_status(self, ticket_id: int, update_data: PaymentStatusUpdate) -> Optional[Ticket]:
        """Record the outcome of payment verification"""
        ticket = self.get_ticket(ticket_id)
        if not ticket:
            return None

        previous = ticket.payment_status
        ticket.payment_status = update_data.payment_status.value
        self.db.commit()

        logger.info(
            "Ticket %s payment status %s -> %s",
            ticket.booking_code, previous, ticket.payment_status
        )
        return self.get_ticket(ticket_id)

    def _generate_booking_code(self) -> str:
        """Short code printed on the ticket"""
        while True:
            code = f"TRH{secrets.token_hex(4).upper()}"
            if not self.db.query(Ticket.id).filter(Ticket.booking_code == code).first():
                return code

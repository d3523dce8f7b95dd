from sqlalchemy import Column, Integer, BigInteger, String, Boolean, Date, DateTime, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.database import Base

# SQLite only autoincrements INTEGER primary keys
IdType = BigInteger().with_variant(Integer, "sqlite")

# ================================
# Stations
# ================================
class Station(Base):
    __tablename__ = "stations"

    id = Column(IdType, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    code = Column(String(20), unique=True, index=True)
    city = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route_stops = relationship("RouteStop", back_populates="station")

# ================================
# Trains & Routes
# ================================
class Train(Base):
    __tablename__ = "trains"

    id = Column(IdType, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    number = Column(String(50), index=True)
    start_time = Column(String(8))  # HH:MM wall-clock departure from the first stop
    speed_kmh = Column(Numeric(8, 2))
    price_per_km = Column(Numeric(10, 2), default=0)
    available_seats = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    route_stops = relationship(
        "RouteStop",
        back_populates="train",
        order_by="RouteStop.sequence",
        cascade="all, delete-orphan"
    )
    tickets = relationship("Ticket", back_populates="train", cascade="all, delete-orphan")

class RouteStop(Base):
    __tablename__ = "route_stops"
    __table_args__ = (
        UniqueConstraint("train_id", "sequence", name="uq_route_stops_train_sequence"),
    )

    id = Column(IdType, primary_key=True, index=True)
    train_id = Column(IdType, ForeignKey("trains.id", ondelete="CASCADE"), nullable=False, index=True)
    station_id = Column(IdType, ForeignKey("stations.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    distance_to_next = Column(Numeric(8, 2))  # km to the next stop; unused on the last stop
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    train = relationship("Train", back_populates="route_stops")
    station = relationship("Station", back_populates="route_stops")

    @property
    def station_name(self):
        return self.station.name if self.station else None

# ================================
# Tickets
# ================================
class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(IdType, primary_key=True, index=True)
    booking_code = Column(String(20), unique=True, nullable=False, index=True)
    train_id = Column(IdType, ForeignKey("trains.id", ondelete="CASCADE"), nullable=False, index=True)
    origin_station_id = Column(IdType, ForeignKey("stations.id"), nullable=False)
    destination_station_id = Column(IdType, ForeignKey("stations.id"), nullable=False)
    passenger_name = Column(String(255), nullable=False)
    travel_date = Column(Date)

    # Priced and timed when booked; later timetable edits do not touch issued tickets
    departure_time = Column(String(8))
    arrival_time = Column(String(8))
    distance_km = Column(Numeric(8, 2), nullable=False)
    price = Column(Integer, nullable=False)

    payment_method = Column(String(20), default="cash")
    payment_status = Column(String(20), default="pending", index=True)  # pending, paid, failed, refunded
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    train = relationship("Train", back_populates="tickets")
    origin_station = relationship("Station", foreign_keys=[origin_station_id])
    destination_station = relationship("Station", foreign_keys=[destination_station_id])

    @property
    def train_name(self):
        return self.train.name if self.train else None

    @property
    def origin_station_name(self):
        return self.origin_station.name if self.origin_station else None

    @property
    def destination_station_name(self):
        return self.destination_station.name if self.destination_station else None

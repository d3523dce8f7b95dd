import logging
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Dict, Iterable, List, Optional, Tuple
from src.models import Station, RouteStop, Ticket
from src.stations.schemas import StationCreate, StationUpdate

logger = logging.getLogger(__name__)

class StationService:
    @staticmethod
    def get_station_by_id(db: Session, station_id: int) -> Optional[Station]:
        return db.query(Station).filter(Station.id == station_id).first()

    @staticmethod
    def get_stations(
        db: Session,
        skip: int = 0,
        limit: int = 50,
        query: Optional[str] = None
    ) -> Tuple[List[Station], int]:
        """Get stations, optionally filtered by name or code"""
        stations_query = db.query(Station)

        if query:
            pattern = f"%{query}%"
            stations_query = stations_query.filter(
                or_(Station.name.ilike(pattern), Station.code.ilike(pattern))
            )

        total = stations_query.count()
        stations = stations_query.order_by(Station.name).offset(skip).limit(limit).all()

        return stations, total

    @staticmethod
    def get_station_names(db: Session, station_ids: Iterable[int]) -> Dict[int, str]:
        """Display names for a set of stations, keyed by station ID"""
        ids = set(station_ids)
        if not ids:
            return {}
        rows = db.query(Station.id, Station.name).filter(Station.id.in_(ids)).all()
        return {row.id: row.name for row in rows}

    @staticmethod
    def create_station(db: Session, station_data: StationCreate) -> Station:
        """Create a new station"""
        if station_data.code:
            existing = db.query(Station).filter(Station.code == station_data.code).first()
            if existing:
                raise ValueError(f"Station code '{station_data.code}' is already used by {existing.name}")

        station = Station(
            name=station_data.name,
            code=station_data.code,
            city=station_data.city
        )

        db.add(station)
        db.commit()
        db.refresh(station)

        logger.info("Created station %s (%s)", station.id, station.name)
        return station

    @staticmethod
    def update_station(db: Session, station_id: int, update_data: StationUpdate) -> Optional[Station]:
        """Update an existing station"""
        station = StationService.get_station_by_id(db, station_id)
        if not station:
            return None

        if update_data.code is not None and update_data.code != station.code:
            existing = db.query(Station).filter(Station.code == update_data.code).first()
            if existing:
                raise ValueError(f"Station code '{update_data.code}' is already used by {existing.name}")
            station.code = update_data.code

        if update_data.name is not None:
            station.name = update_data.name

        if update_data.city is not None:
            station.city = update_data.city

        db.commit()
        db.refresh(station)

        logger.info("Updated station %s", station.id)
        return station

    @staticmethod
    def delete_station(db: Session, station_id: int) -> bool:
        """Delete a station that no train route stops at"""
        station = StationService.get_station_by_id(db, station_id)
        if not station:
            return False

        in_use = db.query(RouteStop).filter(RouteStop.station_id == station_id).count()
        if in_use:
            logger.warning("Refused to delete station %s used by %d route stops", station_id, in_use)
            raise ValueError(f"Station '{station.name}' is used by {in_use} route stop(s)")

        ticketed = db.query(Ticket).filter(
            or_(Ticket.origin_station_id == station_id, Ticket.destination_station_id == station_id)
        ).count()
        if ticketed:
            logger.warning("Refused to delete station %s on %d tickets", station_id, ticketed)
            raise ValueError(f"Station '{station.name}' appears on {ticketed} ticket(s)")

        db.delete(station)
        db.commit()

        logger.info("Deleted station %s", station_id)
        return True

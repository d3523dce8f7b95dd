import logging
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy import func, select
from typing import List, Optional, Tuple
from src.config import settings
from src.models import Train, RouteStop, Station
from src.timetable.calculator import route_segment
from src.timetable.schemas import TrainParameters
from src.trains.schemas import TrainCreate, TrainUpdate, RouteStopCreate, RouteStopUpdate

logger = logging.getLogger(__name__)

class TrainService:
    @staticmethod
    def get_train_by_id(db: Session, train_id: int) -> Optional[Train]:
        return db.query(Train).filter(Train.id == train_id).first()

    @staticmethod
    def get_trains(
        db: Session,
        skip: int = 0,
        limit: int = 50,
        active_only: bool = False
    ) -> Tuple[List[Train], int]:
        query = db.query(Train)
        if active_only:
            query = query.filter(Train.is_active == True)

        total = query.count()
        trains = query.order_by(Train.name).offset(skip).limit(limit).all()

        return trains, total

    @staticmethod
    def create_train(db: Session, train_data: TrainCreate) -> Train:
        """Create a new train without stops"""
        train = Train(**train_data.model_dump())

        db.add(train)
        db.commit()
        db.refresh(train)

        logger.info("Created train %s (%s)", train.id, train.name)
        return train

    @staticmethod
    def update_train(db: Session, train_id: int, update_data: TrainUpdate) -> Optional[Train]:
        train = TrainService.get_train_by_id(db, train_id)
        if not train:
            return None

        for field, value in update_data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(train, field, value)

        db.commit()
        db.refresh(train)

        logger.info("Updated train %s", train.id)
        return train

    @staticmethod
    def delete_train(db: Session, train_id: int) -> bool:
        """Delete a train together with its route"""
        train = TrainService.get_train_by_id(db, train_id)
        if not train:
            return False

        db.delete(train)
        db.commit()

        logger.info("Deleted train %s", train_id)
        return True

    # ================================
    # Route stops
    # ================================
    @staticmethod
    def get_route_stops(db: Session, train_id: int) -> List[RouteStop]:
        """Stops of a train in route order"""
        return db.query(RouteStop).options(
            joinedload(RouteStop.station)
        ).filter(
            RouteStop.train_id == train_id
        ).order_by(RouteStop.sequence).all()

    @staticmethod
    def get_train_parameters(db: Session, train_id: int) -> Optional[TrainParameters]:
        """Start time, speed and fare rate the timetable is computed from"""
        train = TrainService.get_train_by_id(db, train_id)
        if not train:
            return None
        return TrainService.parameters_for(train)

    @staticmethod
    def parameters_for(train: Train) -> TrainParameters:
        speed = train.speed_kmh
        if not speed or speed <= 0:
            speed = settings.DEFAULT_SPEED_KMH
        return TrainParameters(
            start_time=train.start_time,
            speed_kmh=speed,
            price_per_km=train.price_per_km or 0
        )

    @staticmethod
    def get_route_stop(db: Session, train_id: int, stop_id: int) -> Optional[RouteStop]:
        return db.query(RouteStop).filter(
            RouteStop.id == stop_id,
            RouteStop.train_id == train_id
        ).first()

    @staticmethod
    def _check_station(db: Session, station_id: int):
        if not db.query(Station).filter(Station.id == station_id).first():
            raise ValueError(f"Station {station_id} not found")

    @staticmethod
    def _check_sequence_free(db: Session, train_id: int, sequence: int, stop_id: Optional[int] = None):
        query = db.query(RouteStop).filter(
            RouteStop.train_id == train_id,
            RouteStop.sequence == sequence
        )
        if stop_id is not None:
            query = query.filter(RouteStop.id != stop_id)
        if query.first():
            raise ValueError(f"Sequence {sequence} is already used on train {train_id}")

    @staticmethod
    def add_route_stop(db: Session, train_id: int, stop_data: RouteStopCreate) -> Optional[RouteStop]:
        """Add a stop to a train's route, after the last stop unless a sequence is given"""
        train = TrainService.get_train_by_id(db, train_id)
        if not train:
            return None

        TrainService._check_station(db, stop_data.station_id)

        sequence = stop_data.sequence
        if sequence is None:
            last_sequence = db.query(func.max(RouteStop.sequence)).filter(
                RouteStop.train_id == train_id
            ).scalar()
            sequence = 0 if last_sequence is None else last_sequence + 1
        else:
            TrainService._check_sequence_free(db, train_id, sequence)

        stop = RouteStop(
            train_id=train_id,
            station_id=stop_data.station_id,
            sequence=sequence,
            distance_to_next=stop_data.distance_to_next
        )

        db.add(stop)
        db.commit()
        db.refresh(stop)

        logger.info("Added station %s to train %s at sequence %s", stop.station_id, train_id, sequence)
        return stop

    @staticmethod
    def update_route_stop(
        db: Session,
        train_id: int,
        stop_id: int,
        update_data: RouteStopUpdate
    ) -> Optional[RouteStop]:
        stop = TrainService.get_route_stop(db, train_id, stop_id)
        if not stop:
            return None

        if update_data.station_id is not None:
            TrainService._check_station(db, update_data.station_id)
            stop.station_id = update_data.station_id

        if update_data.sequence is not None:
            TrainService._check_sequence_free(db, train_id, update_data.sequence, stop_id=stop_id)
            stop.sequence = update_data.sequence

        if "distance_to_next" in update_data.model_fields_set:
            stop.distance_to_next = update_data.distance_to_next

        db.commit()
        db.refresh(stop)

        logger.info("Updated stop %s of train %s", stop_id, train_id)
        return stop

    @staticmethod
    def delete_route_stop(db: Session, train_id: int, stop_id: int) -> bool:
        stop = TrainService.get_route_stop(db, train_id, stop_id)
        if not stop:
            return False

        db.delete(stop)
        db.commit()

        logger.info("Removed stop %s from train %s", stop_id, train_id)
        return True

    # ================================
    # Search
    # ================================
    @staticmethod
    def search_trains(db: Session, origin_station_id: int, destination_station_id: int) -> List[Train]:
        """Active trains whose route reaches the destination after the origin"""
        serving_origin = select(RouteStop.train_id).where(RouteStop.station_id == origin_station_id)
        candidates = db.query(Train).options(
            selectinload(Train.route_stops)
        ).filter(
            Train.is_active == True,
            Train.id.in_(serving_origin)
        ).order_by(Train.name).all()

        return [
            train for train in candidates
            if route_segment(train.route_stops, origin_station_id, destination_station_id) is not None
        ]

import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from src.config import settings
from src.models import Train
from src.stations.service import StationService
from src.trains.service import TrainService
from src.timetable.calculator import (
    build_schedule, journey_between, route_distance, route_travel_time
)
from src.timetable.clock import format_time
from src.timetable.schemas import (
    Journey, StopSchedule, TimetablePreview, TimetablePreviewRequest,
    TrainJourney, TrainTimetable, UNKNOWN_TIME
)

logger = logging.getLogger(__name__)

def _with_station_names(schedule: List[StopSchedule], names: Dict[int, str]) -> List[StopSchedule]:
    return [
        entry.model_copy(update={"station_name": names.get(entry.station_id)})
        for entry in schedule
    ]

class TimetableService:
    """Feeds stored routes and train parameters through the timetable calculator"""

    def __init__(self, db: Session, dwell_minutes: Optional[int] = None):
        self.db = db
        self.dwell_minutes = settings.DWELL_MINUTES if dwell_minutes is None else dwell_minutes

    def get_train_timetable(self, train_id: int) -> Optional[TrainTimetable]:
        """Full arrival/departure table of a stored train"""
        train = TrainService.get_train_by_id(self.db, train_id)
        if not train:
            return None

        stops = TrainService.get_route_stops(self.db, train_id)
        params = TrainService.parameters_for(train)

        schedule = build_schedule(stops, params.start_time, params.speed_kmh, self.dwell_minutes)
        names = {stop.station_id: stop.station_name for stop in stops}

        return TrainTimetable(
            train_id=train.id,
            train_name=train.name,
            train_number=train.number,
            start_time=format_time(params.start_time),
            speed_kmh=params.speed_kmh,
            price_per_km=params.price_per_km,
            dwell_minutes=self.dwell_minutes,
            schedule=_with_station_names(schedule, names),
            total_travel_time=route_travel_time(stops, params.speed_kmh, self.dwell_minutes),
            total_distance_km=route_distance(stops)
        )

    def _journey_for(self, train: Train, stops, origin_station_id: int, destination_station_id: int) -> Optional[Journey]:
        params = TrainService.parameters_for(train)
        journey = journey_between(
            stops,
            origin_station_id,
            destination_station_id,
            params.start_time,
            params.speed_kmh,
            params.price_per_km,
            self.dwell_minutes
        )
        if journey is None:
            return None

        names = StationService.get_station_names(self.db, [entry.station_id for entry in journey.stops])
        return journey.model_copy(update={"stops": _with_station_names(journey.stops, names)})

    def get_journey(self, train_id: int, origin_station_id: int, destination_station_id: int) -> Optional[Journey]:
        """Timing and fare for a rider's leg on one train, None when the train does not serve it"""
        train = TrainService.get_train_by_id(self.db, train_id)
        if not train:
            return None

        stops = TrainService.get_route_stops(self.db, train_id)
        journey = self._journey_for(train, stops, origin_station_id, destination_station_id)
        if journey is None:
            logger.info(
                "Train %s has no journey from station %s to %s",
                train_id, origin_station_id, destination_station_id
            )
        return journey

    def search_journeys(self, origin_station_id: int, destination_station_id: int) -> List[TrainJourney]:
        """Journeys on every active train serving origin before destination, earliest departure first"""
        results = []
        names = StationService.get_station_names(self.db, [origin_station_id, destination_station_id])

        for train in TrainService.search_trains(self.db, origin_station_id, destination_station_id):
            journey = self._journey_for(train, train.route_stops, origin_station_id, destination_station_id)
            if journey is None:
                continue
            results.append(TrainJourney(
                train_id=train.id,
                train_name=train.name,
                train_number=train.number,
                available_seats=train.available_seats or 0,
                origin_station_name=names.get(origin_station_id),
                destination_station_name=names.get(destination_station_id),
                journey=journey,
                currency=settings.CURRENCY
            ))

        results.sort(key=lambda r: (r.journey.departure_time == UNKNOWN_TIME, r.journey.departure_time))
        logger.debug(
            "Found %d journeys from station %s to %s",
            len(results), origin_station_id, destination_station_id
        )
        return results

    def preview_schedule(self, request: TimetablePreviewRequest) -> TimetablePreview:
        """Timetable for an unsaved route, as shown while an admin edits it"""
        stops = sorted(request.stops, key=lambda stop: stop.sequence)
        dwell = self.dwell_minutes if request.dwell_minutes is None else request.dwell_minutes

        return TimetablePreview(
            schedule=build_schedule(stops, request.start_time, request.speed_kmh, dwell),
            total_travel_time=route_travel_time(stops, request.speed_kmh, dwell),
            total_distance_km=route_distance(stops)
        )

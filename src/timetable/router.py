from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.timetable.schemas import (
    Journey, TimetablePreview, TimetablePreviewRequest, TrainJourney, TrainTimetable
)
from src.timetable.service import TimetableService
from src.trains.service import TrainService

router = APIRouter()

@router.post("/preview", response_model=TimetablePreview)
def preview_timetable(request: TimetablePreviewRequest, db: Session = Depends(get_db)):
    """Live timetable for a route being edited, nothing is stored"""
    return TimetableService(db).preview_schedule(request)

@router.get("/search", response_model=List[TrainJourney])
def search_journeys(
    origin: int = Query(..., description="Origin station ID"),
    destination: int = Query(..., description="Destination station ID"),
    db: Session = Depends(get_db)
):
    """Departure, arrival, duration and fare on every train serving the leg"""
    if origin == destination:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Origin and destination must be different stations"
        )
    return TimetableService(db).search_journeys(origin, destination)

@router.get("/trains/{train_id}", response_model=TrainTimetable)
def get_train_timetable(train_id: int, db: Session = Depends(get_db)):
    """Arrival and departure at every stop of a train"""
    timetable = TimetableService(db).get_train_timetable(train_id)
    if not timetable:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Train with ID {train_id} not found"
        )
    return timetable

@router.get("/trains/{train_id}/journey", response_model=Journey)
def get_journey(
    train_id: int,
    origin: int = Query(..., description="Origin station ID"),
    destination: int = Query(..., description="Destination station ID"),
    db: Session = Depends(get_db)
):
    """Timing, distance and fare for the rider's chosen leg on a train"""
    if not TrainService.get_train_by_id(db, train_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Train with ID {train_id} not found"
        )

    journey = TimetableService(db).get_journey(train_id, origin, destination)
    if not journey:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No valid journey for this selection"
        )
    return journey

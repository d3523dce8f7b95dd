from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List
from src.database import get_db
from src.trains.schemas import (
    Train, TrainCreate, TrainUpdate, TrainListResponse,
    RouteStop, RouteStopCreate, RouteStopUpdate
)
from src.trains.service import TrainService

router = APIRouter()

def _get_train_or_404(db: Session, train_id: int):
    train = TrainService.get_train_by_id(db, train_id)
    if not train:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Train with ID {train_id} not found"
        )
    return train

@router.get("/", response_model=TrainListResponse)
def get_trains(
    skip: int = Query(0, ge=0, description="Number of trains to skip"),
    limit: int = Query(50, ge=1, le=200, description="Number of trains to return"),
    active_only: bool = Query(False, description="Only trains currently in service"),
    db: Session = Depends(get_db)
):
    """Get all trains"""
    trains, total = TrainService.get_trains(db, skip=skip, limit=limit, active_only=active_only)

    return TrainListResponse(
        trains=[Train.model_validate(train) for train in trains],
        total=total,
        page=(skip // limit) + 1,
        per_page=limit
    )

@router.get("/search", response_model=List[Train])
def search_trains(
    origin: int = Query(..., description="Origin station ID"),
    destination: int = Query(..., description="Destination station ID"),
    db: Session = Depends(get_db)
):
    """Trains running from origin to destination"""
    if origin == destination:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Origin and destination must be different stations"
        )
    return TrainService.search_trains(db, origin, destination)

@router.get("/{train_id}", response_model=Train)
def get_train(train_id: int, db: Session = Depends(get_db)):
    """Get train by ID"""
    return _get_train_or_404(db, train_id)

@router.post("/", response_model=Train, status_code=status.HTTP_201_CREATED)
def create_train(train_data: TrainCreate, db: Session = Depends(get_db)):
    """Create new train"""
    return TrainService.create_train(db, train_data)

@router.put("/{train_id}", response_model=Train)
def update_train(train_id: int, train_data: TrainUpdate, db: Session = Depends(get_db)):
    """Update train"""
    train = TrainService.update_train(db, train_id, train_data)
    if not train:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Train not found")
    return train

@router.delete("/{train_id}")
def delete_train(train_id: int, db: Session = Depends(get_db)):
    """Delete train and its route"""
    if not TrainService.delete_train(db, train_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Train not found")
    return {"message": "Train deleted successfully"}

# Route stops
@router.get("/{train_id}/stops", response_model=List[RouteStop])
def get_route_stops(train_id: int, db: Session = Depends(get_db)):
    """Get a train's stops in route order"""
    _get_train_or_404(db, train_id)
    return TrainService.get_route_stops(db, train_id)

@router.post("/{train_id}/stops", response_model=RouteStop, status_code=status.HTTP_201_CREATED)
def add_route_stop(train_id: int, stop_data: RouteStopCreate, db: Session = Depends(get_db)):
    """Add a stop to a train's route"""
    try:
        stop = TrainService.add_route_stop(db, train_id, stop_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not stop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Train not found")
    return stop

@router.put("/{train_id}/stops/{stop_id}", response_model=RouteStop)
def update_route_stop(
    train_id: int,
    stop_id: int,
    stop_data: RouteStopUpdate,
    db: Session = Depends(get_db)
):
    """Update a stop of a train's route"""
    try:
        stop = TrainService.update_route_stop(db, train_id, stop_id, stop_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not stop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route stop not found")
    return stop

@router.delete("/{train_id}/stops/{stop_id}")
def delete_route_stop(train_id: int, stop_id: int, db: Session = Depends(get_db)):
    """Remove a stop from a train's route"""
    if not TrainService.delete_route_stop(db, train_id, stop_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route stop not found")
    return {"message": "Route stop deleted successfully"}

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from src.database import get_db
from src.stations.schemas import Station, StationCreate, StationUpdate, StationSearchResult
from src.stations.service import StationService

router = APIRouter()

@router.get("/", response_model=StationSearchResult)
def get_stations(
    skip: int = Query(0, ge=0, description="Number of stations to skip"),
    limit: int = Query(50, ge=1, le=200, description="Number of stations to return"),
    query: Optional[str] = Query(None, description="Search by station name or code"),
    db: Session = Depends(get_db)
):
    """Get stations with optional name search"""
    stations, total = StationService.get_stations(db, skip=skip, limit=limit, query=query)

    return StationSearchResult(
        stations=[Station.model_validate(station) for station in stations],
        total=total,
        page=(skip // limit) + 1,
        per_page=limit
    )

@router.get("/{station_id}", response_model=Station)
def get_station(station_id: int, db: Session = Depends(get_db)):
    """Get station details by ID"""
    station = StationService.get_station_by_id(db, station_id=station_id)
    if not station:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Station not found"
        )
    return station

@router.post("/", response_model=Station, status_code=status.HTTP_201_CREATED)
def create_station(station_data: StationCreate, db: Session = Depends(get_db)):
    """Create new station"""
    try:
        return StationService.create_station(db, station_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{station_id}", response_model=Station)
def update_station(station_id: int, station_data: StationUpdate, db: Session = Depends(get_db)):
    """Update station"""
    try:
        station = StationService.update_station(db, station_id, station_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not station:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return station

@router.delete("/{station_id}")
def delete_station(station_id: int, db: Session = Depends(get_db)):
    """Delete station"""
    try:
        success = StationService.delete_station(db, station_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return {"message": "Station deleted successfully"}

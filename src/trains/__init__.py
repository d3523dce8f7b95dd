"""
Train Management Module

Trains, their ordered stop lists and the lookups the timetable needs:

- service.py: CRUD for trains and route stops, train parameters, search by origin/destination
- router.py: FastAPI endpoints for train and route administration
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .service import TrainService
from .schemas import (
    Train, TrainCreate, TrainUpdate, TrainListResponse,
    RouteStop, RouteStopCreate, RouteStopUpdate
)

__all__ = [
    "router",
    "TrainService",
    "Train",
    "TrainCreate",
    "TrainUpdate",
    "TrainListResponse",
    "RouteStop",
    "RouteStopCreate",
    "RouteStopUpdate"
]

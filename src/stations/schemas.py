from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class StationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = None

class StationCreate(StationBase):
    pass

class StationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = None

class Station(StationBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class StationSearchResult(BaseModel):
    stations: List[Station]
    total: int
    page: int
    per_page: int

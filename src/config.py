from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./ticket_ride.db"
    DATABASE_ECHO: bool = False

    # Timetable
    DWELL_MINUTES: int = 10  # Halt at every intermediate station
    DEFAULT_SPEED_KMH: float = 60.0
    CURRENCY: str = "INR"

    # Application
    PROJECT_NAME: str = "Ticket Ride Timetable Service"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173", "http://localhost:8080"]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = Settings()

"""Application settings, loaded from the environment and ``.env``."""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Default attendee service ("get all attendees")
    ATTENDEES_API_URL: str = "http://127.0.0.1:8000"
    ATTENDEES_PATH: str = "/attendees"
    REQUEST_TIMEOUT: float = 30.0

    # Presentation
    CHART_HEIGHT: int = 300

    LOG_LEVEL: str = "INFO"

    @property
    def attendees_endpoint(self) -> str:
        return self.ATTENDEES_API_URL.rstrip("/") + "/" + self.ATTENDEES_PATH.lstrip("/")


settings = Settings()

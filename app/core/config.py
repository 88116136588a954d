# app/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import Field
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra='ignore', populate_by_name=True)

    # Application Settings
    APP_NAME: str = "Customer Settings API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))

    # Security Settings
    SECRET_KEY: str = Field(default="change-me-in-prod", alias="JWT_SECRET_KEY")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # CORS Settings
    ALLOWED_ORIGINS: str = os.environ.get("ALLOWED_ORIGINS", "*")

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Access guard redirects
    LOGIN_PATH: str = "/login"
    CUSTOMER_ROLE: str = "customer"

    # Numeric setting bounds (inclusive)
    REMINDER_TIMING_MIN_HOURS: int = 1
    REMINDER_TIMING_MAX_HOURS: int = 168
    BUFFER_TIME_MIN_MINUTES: int = 0
    BUFFER_TIME_MAX_MINUTES: int = 120
    SESSION_TIMEOUT_MIN_MINUTES: int = 5
    SESSION_TIMEOUT_MAX_MINUTES: int = 1440

    # Page store
    MAX_PAGES: int = 1000
    MAX_PAGES_PER_USER: int = 5

    # Roles that own a dashboard; anything else is sent to login
    KNOWN_ROLES: List[str] = ["admin", "barber", "customer"]

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    cors_env = os.environ.get("CORS_ORIGINS")
    if cors_env:
        s.ALLOWED_ORIGINS = cors_env
    return s

settings: Settings = get_settings()

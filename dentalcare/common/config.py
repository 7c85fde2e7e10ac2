# dentalcare/common/config.py

import os
from typing import Annotated, List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Load environment variables from the matching .env file
env_file = ".env" if os.getenv("APP_ENV", "development") == "development" else ".env.production"
load_dotenv(env_file)

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    DATABASE_URL: str
    ALEMBIC_DATABASE_URL: str = ""
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "info"

    # Civil time used for working hours and the "today" window
    CLINIC_TIMEZONE: str = "UTC"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

settings = Settings()

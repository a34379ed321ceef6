# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_inventory.db"

    FRONTEND_URL: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    # Stock below this value raises a low-stock notification
    LOW_STOCK_THRESHOLD: int = 20
    # Products sold at least this many times are flagged as high demand
    HIGH_DEMAND_THRESHOLD: int = 50

    # Attempts made by run_transaction before giving up on write conflicts
    TRANSACTION_MAX_ATTEMPTS: int = 5

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Database
    # For SQLite (default, no extra driver needed)
    DATABASE_URL: str = "sqlite:///./wallet_app.db"

    # For PostgreSQL (requires psycopg2-binary)
    # DATABASE_URL: str = "postgresql://postgres:postgres@db:5432/wallet_app"

    # Reject accounts/types outside the fixed categories on create
    ENFORCE_CATEGORIES: bool = False

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Dashboard client
    API_BASE_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"


settings = Settings()

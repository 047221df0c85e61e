from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Livraria API"
    VERSION: str = "v1"
    DESCRIPTION: str = "A Rest API for managing a book catalog"

    API_V1_STR: str = "/api/v1"

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./books.db"

    # Database Pool Settings (ignored for SQLite)
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_TIMEOUT: int = 30

    # --- Pagination ---
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_SIZE: int = 10

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # --- HTTP ---
    CORS_ORIGINS: str = ""
    ALLOWED_HOSTS: str = ""
    MAX_REQUEST_SIZE: int = 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./echoes.db"
    SQL_ECHO: bool = False

    # Content
    CONTENT_DIR: Path = PACKAGE_DIR / "data" / "leaders"

    # Gameplay
    CHOICE_TIMEOUT_SECONDS: float = 30.0  # 0 disables the per-level timeout
    USERNAME_PATTERN: str = r"^[A-Za-z0-9_]+$"

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "WARNING"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

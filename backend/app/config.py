"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_DIR = Path(__file__).resolve().parents[1]
ENV_FILE_BACKEND = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_BACKEND),
        extra="ignore",
    )

    # Database
    database_url: str = f"sqlite:///{BACKEND_DIR / 'topics.db'}"

    # Static assets (default covers live under {static_dir}/default/)
    static_dir: str = str(BACKEND_DIR / "static")
    static_url: str = "/static/"

    # Uploaded images
    upload_dir: str = str(BACKEND_DIR / "upload")
    upload_url: str = "/upload/"
    image_max_size: int = 5 * 1024 * 1024
    image_max_pixels: int = 40_000_000

    # Application
    app_env: str = "development"
    log_level: str = "info"


settings = Settings()

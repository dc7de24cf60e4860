"""Configuration from .env only."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # Сколько часов история (story) видна в галерее после публикации
    story_ttl_hours: int = 24

    # Демо-галереи, медиа и гости при старте (хранилище всё равно в памяти)
    seed_sample_data: bool = False

    log_level: str = "INFO"
    # В ответе 500 отдавать traceback
    debug: bool = False


settings = Settings()

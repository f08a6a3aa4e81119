"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./rsvp.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    CACHE_TTL_SECONDS: int = 600

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_GLOBAL: int = 100
    RATE_LIMIT_GLOBAL_PERIOD_SECONDS: int = 900
    RATE_LIMIT_SUBMIT: int = 10
    RATE_LIMIT_SUBMIT_PERIOD_SECONDS: int = 60

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()

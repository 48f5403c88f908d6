from pydantic import validator
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application configuration using environment variables."""

    # Application
    APP_NAME: str = "Chat Backend"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    NODE_ENV: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS
    FRONTEND_URL: str = "http://localhost:5000"

    # Request limits
    MAX_BODY_SIZE: int = 50 * 1024 * 1024  # 50MB

    # Keep-alive (production only)
    RENDER_EXTERNAL_URL: Optional[str] = None
    KEEP_ALIVE_INTERVAL_SECONDS: float = 14 * 60  # 14 minutes

    @validator('FRONTEND_URL')
    def strip_trailing_slash(cls, v):
        if v.endswith('/'):
            return v[:-1]
        return v

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def keep_alive_url(self) -> str:
        """Health URL the keep-alive loop pings."""
        base = self.RENDER_EXTERNAL_URL or f"http://localhost:{self.PORT}"
        return f"{base.rstrip('/')}/health"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

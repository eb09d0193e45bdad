from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    PROJECT_NAME: str = "Employee Manager"

    # Employee API (external backend)
    API_BASE_URL: str = "http://localhost:8080"

    # Logging
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    @field_validator("API_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined onto the base URL, so drop a trailing slash"""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

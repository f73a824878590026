"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .models.task import Priority


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = Field(default="Task Catalog", description="Application name shown in banners")
    environment: str = Field(default="development", description="Deployment environment")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path; console only when unset")

    # Console Configuration
    date_format: str = Field(default="%Y-%m-%d %H:%M", description="strptime pattern for due dates")
    clear_keyword: str = Field(default="clear", description="Input that clears an optional field on update")
    default_priority: Priority = Field(default=Priority.MEDIUM, description="Priority used when none is entered")

    class Config:
        """Pydantic configuration."""
        env_prefix = "TASK_CATALOG_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()

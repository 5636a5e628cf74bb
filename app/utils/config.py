from functools import lru_cache
from typing import List, Tuple
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class CSVColumnConfig(BaseModel):
    """Column names read from uploaded test case exports.

    Each entry is a tuple of aliases; the first alias with a non-blank value wins.
    """
    id: Tuple[str, ...] = ("id", "v2.id")
    title: Tuple[str, ...] = ("title",)
    actions: Tuple[str, ...] = ("steps_actions", "steps")
    results: Tuple[str, ...] = ("steps_result",)
    url: Tuple[str, ...] = ("url",)
    description: Tuple[str, ...] = ("description",)
    preconditions: Tuple[str, ...] = ("preconditions",)
    postconditions: Tuple[str, ...] = ("postconditions",)

class Settings(BaseSettings):
    """Main application settings."""
    # Basic app settings
    app_name: str = "VisualTestCaseValidator"
    app_version: str = "1.0.0"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    # Ingestion settings
    default_test_url: str = "https://your-ats-domain.com"
    empty_steps_placeholder: str = "No steps provided"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    csv_columns: CSVColumnConfig = CSVColumnConfig()

    # Review artifacts
    screenshot_dir: str = "screenshots"

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/debug.log"  # empty string disables file logging

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False,
        extra='ignore',
        validate_default=True
    )

@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Returns:
        Settings: Application settings instance
    """
    return Settings()

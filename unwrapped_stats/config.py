"""Application configuration and environment settings"""
from datetime import date
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    # Input/Output directories with defaults
    INPUT_DIR: str = Field("/input", description="Directory containing streaming history exports")
    OUTPUT_DIR: str = Field("/output", description="Directory for output files")

    # Batch loading
    READ_WORKERS: int = Field(4, ge=1, description="Threads used to read files of one batch")

    # Optional filter applied after loading; custom dates win over the preset
    DATE_PRESET: Optional[str] = Field(None, description="Named date preset, e.g. 'lastYear'")
    DATE_START: Optional[date] = Field(None, description="Custom range start date (YYYY-MM-DD)")
    DATE_END: Optional[date] = Field(None, description="Custom range end date (YYYY-MM-DD)")

    # Output shaping
    TOP_LIMIT: Optional[int] = Field(None, ge=1, description="Truncate top lists in the written output")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )

settings = Settings()

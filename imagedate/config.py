"""Configuration for imagedate."""

from typing import Literal, Optional

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from .core.metadata import ExifToolMetadataReader, MetadataReader, PillowMetadataReader


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Metadata decoding
    metadata_backend: Literal["pillow", "exiftool"] = "pillow"
    exiftool_executable: Optional[str] = None  # None uses exiftool from PATH

    # Logging
    log_level: str = "INFO"

    @field_validator("metadata_backend", "log_level", mode="before")
    @classmethod
    def _normalize_case(cls, value, info):
        if isinstance(value, str):
            value = value.strip()
            return value.upper() if info.field_name == "log_level" else value.lower()
        return value

    def create_reader(self) -> MetadataReader:
        """Build the metadata reader for the configured backend."""
        if self.metadata_backend == "exiftool":
            return ExifToolMetadataReader(executable=self.exiftool_executable)
        return PillowMetadataReader()

    model_config = ConfigDict(
        env_prefix="IMAGEDATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env
    )


# Global settings instance
settings = Settings()

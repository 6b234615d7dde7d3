"""Configuration management for the BizFile OCR service.

Loads and validates YAML configuration with sensible defaults. The
document analysis endpoint and key are also read from ``AZURE_*``
environment variables or a ``.env`` file.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class DocumentAnalysisConfig(BaseSettings):
    """Connection settings for the Azure document analysis service."""

    endpoint: str | None = None
    key: str | None = None
    model_id: str = "prebuilt-layout"
    timeout_seconds: float = 300.0

    model_config = SettingsConfigDict(
        env_prefix="AZURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.key)


class StorageConfig(BaseModel):
    """Configuration for uploaded file storage."""

    upload_dir: str = "uploads"
    retain_uploads: bool = True


class ExtractionConfig(BaseModel):
    """Configuration for field extraction."""

    patterns_path: str | None = None


class AppConfig(BaseModel):
    """Top-level application configuration."""

    document_analysis: DocumentAnalysisConfig = Field(
        default_factory=DocumentAnalysisConfig
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_file: str | None = None


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        # Built directly so AZURE_* variables fill what the file leaves out.
        analysis = DocumentAnalysisConfig(**(raw.pop("document_analysis", None) or {}))
        return AppConfig(document_analysis=analysis, **raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()

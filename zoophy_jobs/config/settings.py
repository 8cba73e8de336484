"""Typed runtime settings with dotenv support and startup validation."""

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and job submission configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `zoophy_api_uri` reads from `ZOOPHY_API_URI`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        zoophy_api_uri: Base URI of the remote ZooPhy analysis API.
        zoophy_request_timeout_seconds: Timeout applied to each remote call.
        upload_directory: Directory holding uploaded files until they are parsed.
        predictor_upload_max_bytes: Size cap for predictor file uploads.
        accession_upload_max_bytes: Size cap for accession list uploads.
        accession_upload_line_limit: Maximum accession lines read from one upload.
        job_min_accessions: Minimum accession count accepted for a job.
        job_max_accessions: Maximum accession count accepted for a job.
        substitution_models: Closed set of accepted substitution model literals.
        log_level: Standard logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    zoophy_api_uri: str = Field(min_length=1)
    zoophy_request_timeout_seconds: float = Field(default=30.0, gt=0)
    upload_directory: str = Field(default="uploads", min_length=1)
    predictor_upload_max_bytes: int = Field(default=50000, ge=1)
    accession_upload_max_bytes: int = Field(default=50000, ge=1)
    accession_upload_line_limit: int = Field(default=2500, ge=1)
    job_min_accessions: int = Field(default=5, ge=1)
    job_max_accessions: int = Field(default=1000, ge=1)
    substitution_models: tuple[str, ...] = Field(default=("HKY",), min_length=1)
    log_level: str = Field(default="INFO")

    @field_validator("zoophy_api_uri")
    @classmethod
    def _validate_api_uri(cls, value: str) -> str:
        stripped_value = value.strip().rstrip("/")
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("job_max_accessions")
    @classmethod
    def _validate_accession_bounds(cls, value: int, info) -> int:
        min_accessions = info.data.get("job_min_accessions", 5)
        if value < min_accessions:
            raise ValueError("job_max_accessions must be greater than or equal to job_min_accessions")
        return value

    @field_validator("substitution_models")
    @classmethod
    def _validate_substitution_models(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        stripped_models = tuple(model.strip() for model in value)
        if any(not model for model in stripped_models):
            raise ValueError("substitution_models must not contain blank values")
        return stripped_models

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_level = value.strip().upper()
        if normalized_level not in logging.getLevelNamesMapping():
            raise ValueError(f"unsupported log_level={value}")
        return normalized_level


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error

"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from zoophy_jobs.adapters import ZoophyApiAdapter
from zoophy_jobs.api import create_api_application
from zoophy_jobs.config import AppSettings, config_load_settings
from zoophy_jobs.jobs import JobSubmissionOrchestrator
from zoophy_jobs.logging_config import logging_configure


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    logging_configure(resolved_settings.log_level)
    submission_orchestrator = bootstrap_create_submission_orchestrator(settings=resolved_settings)
    return create_api_application(settings=resolved_settings, submission_orchestrator=submission_orchestrator)


def bootstrap_create_submission_orchestrator(settings: AppSettings | None = None) -> JobSubmissionOrchestrator:
    """Build submission orchestrator for HTTP and command-line trigger surfaces.

    Args:
        settings: Optional preloaded settings; loaded from the environment when omitted.

    Returns:
        JobSubmissionOrchestrator: Orchestrator wired to the ZooPhy API adapter.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    gateway = ZoophyApiAdapter(
        base_url=resolved_settings.zoophy_api_uri,
        request_timeout_seconds=resolved_settings.zoophy_request_timeout_seconds,
    )
    return JobSubmissionOrchestrator(gateway=gateway)

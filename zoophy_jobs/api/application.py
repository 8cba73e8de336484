"""FastAPI application factory for the job submission service."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from zoophy_jobs.config import AppSettings
from zoophy_jobs.domain import AppMetadata
from zoophy_jobs.jobs import JobSubmissionPort

from .routers import api_create_health_router, api_create_jobs_router

logger = logging.getLogger(__name__)


def create_api_application(settings: AppSettings, submission_orchestrator: JobSubmissionPort) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        submission_orchestrator: Orchestrator for job submission.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """

    metadata = AppMetadata(application_name="zoophy-jobs", environment_name=settings.environment_name)

    @asynccontextmanager
    async def api_lifespan(_application: FastAPI) -> AsyncIterator[None]:
        yield
        logger.info("Shutting down, closing ZooPhy API connections")
        submission_orchestrator.job_close()

    application = FastAPI(title="ZooPhy Jobs", lifespan=api_lifespan)

    @application.exception_handler(RequestValidationError)
    async def api_request_validation_handler(request: Request, error: RequestValidationError) -> JSONResponse:
        """Convert framework request parsing failures into the service error shape.

        Args:
            request: Failing request.
            error: Framework validation error.

        Returns:
            JSONResponse: HTTP 400 payload.
        """

        logger.warning("Malformed request to %s: %s", request.url.path, error.errors())
        payload = {"status": status.HTTP_400_BAD_REQUEST, "error": "Malformed request"}
        return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service metadata.

        Returns:
            dict[str, str]: Service name and environment.
        """

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
        }

    application.include_router(api_create_health_router(submission_orchestrator=submission_orchestrator))
    application.include_router(
        api_create_jobs_router(settings=settings, submission_orchestrator=submission_orchestrator)
    )

    return application

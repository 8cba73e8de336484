"""Health endpoint router composition."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from zoophy_jobs.jobs import JobSubmissionPort


def api_create_health_router(submission_orchestrator: JobSubmissionPort) -> APIRouter:
    """Create health-check router reporting liveness and the gateway target.

    The remote API is not called; availability of the ZooPhy API surfaces
    through submission outcomes instead.

    Args:
        submission_orchestrator: Orchestrator exposing the gateway target label.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when submission_orchestrator is invalid.
    """

    if submission_orchestrator is None:
        raise ValueError("submission_orchestrator must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "gateway": submission_orchestrator.job_target_label(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router

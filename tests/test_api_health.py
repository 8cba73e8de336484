"""Tests for API health, index and shutdown behavior."""

from fastapi.testclient import TestClient

from zoophy_jobs.api.application import create_api_application
from zoophy_jobs.config import AppSettings


class _SubmissionOrchestratorStub:
    """Test double exposing the gateway target label and close tracking."""

    def __init__(self):
        self.closed = False

    def job_target_label(self) -> str:
        """Return deterministic target label.

        Returns:
            str: Gateway target label.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return "http://zoophy.test"

    def job_submit(self, job_request):
        raise AssertionError("health checks must not submit jobs")

    def job_close(self) -> None:
        self.closed = True


def _build_client(orchestrator: _SubmissionOrchestratorStub | None = None) -> TestClient:
    settings = AppSettings(zoophy_api_uri="http://zoophy.test", environment_name="test")
    return TestClient(
        create_api_application(
            settings=settings,
            submission_orchestrator=orchestrator or _SubmissionOrchestratorStub(),
        )
    )


def test_api_health_returns_ok_with_gateway_target() -> None:
    """Return 200 with the configured gateway target.

    Returns:
        None: Assertions validate health response contract.

    Raises:
        AssertionError: Raised when response contract is violated.
    """

    response = _build_client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "up", "gateway": "http://zoophy.test"}


def test_api_index_reports_environment() -> None:
    response = _build_client().get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "zoophy-jobs", "status": "ready", "environment": "test"}


def test_api_shutdown_closes_gateway_connections() -> None:
    """Close the submission gateway when the application shuts down.

    Returns:
        None: Assertions validate close on shutdown only.

    Raises:
        AssertionError: Raised when connections are closed early or never.
    """

    orchestrator = _SubmissionOrchestratorStub()

    with _build_client(orchestrator) as client:
        assert client.get("/health").status_code == 200
        assert orchestrator.closed is False

    assert orchestrator.closed is True

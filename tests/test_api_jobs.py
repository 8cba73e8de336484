"""Tests for job submission and upload API endpoints."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from zoophy_jobs.api.application import create_api_application
from zoophy_jobs.config import AppSettings
from zoophy_jobs.domain import JobRequest
from zoophy_jobs.jobs import (
    SubmissionAccepted,
    SubmissionGatewayError,
    SubmissionOutcome,
    SubmissionRejected,
    SubmissionUnknownServiceError,
)

_VALID_PAYLOAD = {
    "accessions": ["AB123", "CD456", "EF789", "GH012", "IJ345"],
    "replyEmail": "a@b.com",
    "useGLM": False,
    "predictors": None,
    "xmlOptions": {"chainLength": 1000000, "subSampleRate": 1000, "substitutionModel": "HKY"},
}


class _SubmissionOrchestratorStub:
    """Orchestrator stub returning one scripted outcome and capturing jobs."""

    def __init__(self, outcome: SubmissionOutcome | None = None, error: Exception | None = None):
        """Initialize stub state.

        Args:
            outcome: Outcome returned by `job_submit`.
            error: Exception raised by `job_submit` instead of returning.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.outcome = outcome
        self.error = error
        self.submitted_jobs: list[JobRequest] = []
        self.closed = False

    def job_target_label(self) -> str:
        return "http://zoophy.test"

    def job_submit(self, job_request: JobRequest) -> SubmissionOutcome:
        self.submitted_jobs.append(job_request)
        if self.error is not None:
            raise self.error
        return self.outcome

    def job_close(self) -> None:
        self.closed = True


def _build_client(tmp_path: Path, orchestrator: _SubmissionOrchestratorStub) -> TestClient:
    """Create API client for job endpoint tests.

    Args:
        tmp_path: Upload directory for the test application.
        orchestrator: Orchestrator test double.

    Returns:
        TestClient: FastAPI test client.
    """

    settings = AppSettings(zoophy_api_uri="http://zoophy.test", upload_directory=str(tmp_path))
    return TestClient(create_api_application(settings=settings, submission_orchestrator=orchestrator))


def test_api_job_run_returns_202_with_tracking_fields(tmp_path: Path) -> None:
    """Return 202 with message, job size and removed records when started.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate accepted response payload.

    Raises:
        AssertionError: Raised when accepted response contract is violated.
    """

    orchestrator = _SubmissionOrchestratorStub(
        outcome=SubmissionAccepted(job_size=4, records_removed=("IJ345",), tracking_message="Job Started: 42")
    )
    client = _build_client(tmp_path, orchestrator)

    response = client.post("/job/run", json=_VALID_PAYLOAD)

    assert response.status_code == 202
    assert response.json() == {
        "status": 202,
        "message": "Job Started: 42",
        "jobSize": 4,
        "recordsRemoved": ["IJ345"],
    }
    assert orchestrator.submitted_jobs[0].accessions == tuple(_VALID_PAYLOAD["accessions"])


def test_api_job_run_returns_400_without_contacting_remote(tmp_path: Path) -> None:
    """Return aggregated validation errors and never call the orchestrator.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate invalid-input response.

    Raises:
        AssertionError: Raised when invalid input reaches the remote service.
    """

    orchestrator = _SubmissionOrchestratorStub()
    client = _build_client(tmp_path, orchestrator)

    response = client.post("/job/run", json={**_VALID_PAYLOAD, "accessions": ["AB123"]})

    assert response.status_code == 400
    assert response.json() == {
        "status": 400,
        "error": "INVALID JOB PARAMETER(S): Invalid number of Accessions: 1",
    }
    assert orchestrator.submitted_jobs == []


def test_api_job_run_maps_rejection_to_200_with_error(tmp_path: Path) -> None:
    orchestrator = _SubmissionOrchestratorStub(outcome=SubmissionRejected(reason="Too few distinct locations"))
    client = _build_client(tmp_path, orchestrator)

    response = client.post("/job/run", json=_VALID_PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {"status": 200, "error": "Too few distinct locations"}


def test_api_job_run_maps_remote_failures_to_500(tmp_path: Path) -> None:
    """Return 500 for gateway errors and unknown service errors.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate failure response payloads.

    Raises:
        AssertionError: Raised when failure mapping is incorrect.
    """

    gateway_client = _build_client(
        tmp_path,
        _SubmissionOrchestratorStub(
            outcome=SubmissionGatewayError(reason="Failed to validate ZooPhy Job with ZooPhy API")
        ),
    )
    unknown_client = _build_client(tmp_path, _SubmissionOrchestratorStub(outcome=SubmissionUnknownServiceError()))
    crashing_client = _build_client(tmp_path, _SubmissionOrchestratorStub(error=RuntimeError("boom")))

    gateway_response = gateway_client.post("/job/run", json=_VALID_PAYLOAD)
    unknown_response = unknown_client.post("/job/run", json=_VALID_PAYLOAD)
    crashing_response = crashing_client.post("/job/run", json=_VALID_PAYLOAD)

    assert gateway_response.status_code == 500
    assert gateway_response.json()["error"] == "Failed to validate ZooPhy Job with ZooPhy API"
    assert unknown_response.status_code == 500
    assert unknown_response.json() == {"status": 500, "error": "Unknown ZooPhy API Error during Start"}
    assert crashing_response.status_code == 500
    assert crashing_response.json()["error"] == "Failed to start ZooPhy Job"


def test_api_job_run_rejects_malformed_bodies(tmp_path: Path) -> None:
    """Return 400 for unparsable JSON and non-object bodies.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate malformed body handling.

    Raises:
        AssertionError: Raised when malformed bodies are not rejected.
    """

    client = _build_client(tmp_path, _SubmissionOrchestratorStub())

    invalid_json_response = client.post(
        "/job/run",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    list_response = client.post("/job/run", json=["AB123"])

    assert invalid_json_response.status_code == 400
    assert invalid_json_response.json()["status"] == 400
    assert list_response.status_code == 400
    assert list_response.json() == {"status": 400, "error": "Malformed job request"}


def test_api_job_predictors_upload_returns_grouped_predictors(tmp_path: Path) -> None:
    """Parse a predictor upload and leave no stored copy behind.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate predictor payload and cleanup.

    Raises:
        AssertionError: Raised when predictor upload handling is incorrect.
    """

    client = _build_client(tmp_path, _SubmissionOrchestratorStub())

    response = client.post(
        "/job/predictors",
        files={"predictorsBatchFile": ("predictors.tsv", b"State\tPop\nTexas\t7\n", "text/tab-separated-values")},
    )

    assert response.status_code == 200
    assert response.json() == {
        "status": 200,
        "predictors": {"Texas": [{"state": "Texas", "name": "Pop", "value": 7.0, "year": None}]},
    }
    assert list(tmp_path.iterdir()) == []


def test_api_job_predictors_upload_rejects_bad_files(tmp_path: Path) -> None:
    """Return 400 for missing files, wrong declarations and bad cells.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate predictor upload rejections.

    Raises:
        AssertionError: Raised when bad uploads are accepted.
    """

    client = _build_client(tmp_path, _SubmissionOrchestratorStub())

    missing_response = client.post("/job/predictors", data={"other": "value"})
    wrong_type_response = client.post(
        "/job/predictors",
        files={"predictorsBatchFile": ("predictors.tsv", b"State\tPop\nTexas\t7\n", "text/csv")},
    )
    bad_cell_response = client.post(
        "/job/predictors",
        files={"predictorsBatchFile": ("predictors.tsv", b"State\tPop\nTexas\tabc\n", "text/tab-separated-values")},
    )

    assert missing_response.status_code == 400
    assert missing_response.json()["error"] == "Missing Predictor File"
    assert wrong_type_response.status_code == 400
    assert wrong_type_response.json()["error"] == "Invalid Predictor File"
    assert bad_cell_response.status_code == 400
    assert bad_cell_response.json()["error"] == 'Invalid Predictor value: "abc"'
    assert list(tmp_path.iterdir()) == []


def test_api_job_accessions_upload_normalizes_and_reports_lines(tmp_path: Path) -> None:
    """Return normalized accessions or every offending line.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate accession upload responses.

    Raises:
        AssertionError: Raised when accession upload handling is incorrect.
    """

    client = _build_client(tmp_path, _SubmissionOrchestratorStub())

    valid_response = client.post(
        "/job/accessions",
        files={"accessionFile": ("ids.txt", b"KX369547\nCY021709.1\n", "text/plain")},
    )
    invalid_response = client.post(
        "/job/accessions",
        files={"accessionFile": ("ids.txt", b"KX369547\nbad!\n", "text/plain")},
    )
    wrong_name_response = client.post(
        "/job/accessions",
        files={"accessionFile": ("ids.csv", b"KX369547\n", "text/plain")},
    )

    assert valid_response.status_code == 200
    assert valid_response.json() == {"status": 200, "accessions": ["KX369547", "CY021709"]}
    assert invalid_response.status_code == 400
    assert invalid_response.json()["error"] == 'Invalid Accession(s): "bad!" on line #2'
    assert wrong_name_response.status_code == 400
    assert wrong_name_response.json()["error"] == "Invalid File"
    assert list(tmp_path.iterdir()) == []

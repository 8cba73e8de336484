"""Regression tests for command-line job and predictor commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import zoophy_jobs.main as main_module
from zoophy_jobs.jobs import SubmissionAccepted, SubmissionRejected


class _SubmissionOrchestratorStub:
    """Orchestrator stub returning one scripted outcome."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.submitted_jobs = []
        self.closed = False

    def job_submit(self, job_request):
        self.submitted_jobs.append(job_request)
        return self.outcome

    def job_close(self):
        self.closed = True


@pytest.fixture
def _payload_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a valid job payload and configure the required API URI.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        Path: Payload file location.
    """

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ZOOPHY_API_URI", "http://zoophy.test")
    payload_path = tmp_path / "job.json"
    payload_path.write_text(
        json.dumps(
            {
                "accessions": ["AB123", "CD456", "EF789", "GH012", "IJ345"],
                "replyEmail": "a@b.com",
                "xmlOptions": {"chainLength": 1000000, "subSampleRate": 1000, "substitutionModel": "HKY"},
            }
        ),
        encoding="utf-8",
    )
    return payload_path


def test_main_submit_job_prints_accepted_result(
    _payload_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit 0 and print the 202 payload when the job starts.

    Args:
        _payload_path: Valid payload file.
        monkeypatch: Pytest monkeypatch fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate printed payload and exit code.

    Raises:
        AssertionError: Raised when command output is incorrect.
    """

    orchestrator = _SubmissionOrchestratorStub(
        SubmissionAccepted(job_size=5, records_removed=(), tracking_message="Job Started: 7")
    )
    monkeypatch.setattr(main_module, "bootstrap_create_submission_orchestrator", lambda settings: orchestrator)

    exit_code = main_module.main_submit_job(_payload_path)

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {
        "status": 202,
        "message": "Job Started: 7",
        "jobSize": 5,
        "recordsRemoved": [],
    }
    assert len(orchestrator.submitted_jobs) == 1
    assert orchestrator.closed is True


def test_main_submit_job_returns_1_for_rejection_and_invalid_payload(
    _payload_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    orchestrator = _SubmissionOrchestratorStub(SubmissionRejected(reason="Too few distinct locations"))
    monkeypatch.setattr(main_module, "bootstrap_create_submission_orchestrator", lambda settings: orchestrator)

    assert main_module.main_submit_job(_payload_path) == 1
    assert json.loads(capsys.readouterr().out)["error"] == "Too few distinct locations"

    _payload_path.write_text(json.dumps({"accessions": ["AB123"]}), encoding="utf-8")
    assert main_module.main_submit_job(_payload_path) == 1
    assert json.loads(capsys.readouterr().out)["status"] == 400
    assert len(orchestrator.submitted_jobs) == 1


def test_main_parse_predictors_prints_mapping_or_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print predictor JSON for valid tables and an error for invalid ones.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate command output.

    Raises:
        AssertionError: Raised when command output is incorrect.
    """

    table_path = tmp_path / "predictors.tsv"
    table_path.write_text("State\tPop\nTexas\t7\n", encoding="utf-8")

    assert main_module.main_parse_predictors(table_path) == 0
    assert json.loads(capsys.readouterr().out)["predictors"]["Texas"][0]["value"] == 7.0
    assert table_path.exists()

    table_path.write_text("State\tPop\nTexas\tseven\n", encoding="utf-8")
    assert main_module.main_parse_predictors(table_path) == 1
    assert json.loads(capsys.readouterr().out)["error"] == 'Invalid Predictor value: "seven"'


def test_main_parse_predictors_reports_non_utf8_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    table_path = tmp_path / "predictors.tsv"
    table_path.write_bytes(b"State\tPop\nTexas\t\xff\n")

    assert main_module.main_parse_predictors(table_path) == 1
    assert json.loads(capsys.readouterr().out) == {"status": 400, "error": "Predictor file is not UTF-8 text"}

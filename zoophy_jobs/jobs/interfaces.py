"""Typed interfaces for job-layer submission responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol, Union

from zoophy_jobs.domain import JobRequest


class SubmissionState(str, Enum):
    """States of one two-phase submission, terminal states last."""

    IDLE = "idle"
    VALIDATING = "validating"
    RUNNING = "running"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    GATEWAY_ERROR = "gateway_error"
    UNKNOWN_SERVICE_ERROR = "unknown_service_error"


@dataclass(frozen=True)
class SubmissionAccepted:
    """The remote service validated and started the job.

    Attributes:
        job_size: Number of accessions the remote service kept.
        records_removed: Accessions dropped during remote validation.
        tracking_message: Opaque run response body.
    """

    state: ClassVar[SubmissionState] = SubmissionState.ACCEPTED

    job_size: int
    records_removed: tuple[str, ...]
    tracking_message: str


@dataclass(frozen=True)
class SubmissionRejected:
    """The remote dry run refused the job for a business reason.

    Attributes:
        reason: User-facing rejection reason.
    """

    state: ClassVar[SubmissionState] = SubmissionState.REJECTED

    reason: str


@dataclass(frozen=True)
class SubmissionGatewayError:
    """The validate phase could not reach or understand the remote service.

    Attributes:
        reason: Generic caller-facing failure description.
    """

    state: ClassVar[SubmissionState] = SubmissionState.GATEWAY_ERROR

    reason: str


@dataclass(frozen=True)
class SubmissionUnknownServiceError:
    """The run phase failed after a successful dry run."""

    state: ClassVar[SubmissionState] = SubmissionState.UNKNOWN_SERVICE_ERROR


SubmissionOutcome = Union[
    SubmissionAccepted,
    SubmissionRejected,
    SubmissionGatewayError,
    SubmissionUnknownServiceError,
]


class JobSubmissionPort(Protocol):
    """Port definition for submitting validated jobs to the analysis service."""

    def job_submit(self, job_request: JobRequest) -> SubmissionOutcome:
        """Submit one validated job through the validate-then-run protocol.

        Args:
            job_request: Fully validated job.

        Returns:
            SubmissionOutcome: Terminal submission outcome.

        Raises:
            RuntimeError: Raised when submission fails unexpectedly.
        """

    def job_target_label(self) -> str:
        """Return the remote target used for submissions.

        Returns:
            str: Human-readable upstream identifier.

        Raises:
            RuntimeError: Raised when target metadata is unavailable.
        """

    def job_close(self) -> None:
        """Release remote connection resources held by the submitter."""

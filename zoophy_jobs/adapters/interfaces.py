"""Typed interfaces for adapter-layer responsibilities."""

from dataclasses import dataclass
from typing import Any
from typing import Protocol


@dataclass(frozen=True)
class GatewayValidationResult:
    """Result contract for the remote dry-run validation call.

    Attributes:
        status_code: HTTP status returned by the validate endpoint.
        error: Remote validation error, None when the job was accepted.
        accessions_used: Accessions the remote service will analyse.
        accessions_removed: Accessions dropped during remote validation.
    """

    status_code: int
    error: str | None
    accessions_used: tuple[str, ...]
    accessions_removed: tuple[str, ...]


@dataclass(frozen=True)
class GatewayRunResult:
    """Result contract for the remote job start call.

    Attributes:
        status_code: HTTP status returned by the run endpoint.
        body: Opaque response text used as the tracking message.
    """

    status_code: int
    body: str


class ZoophyGatewayPort(Protocol):
    """Port definition for the remote ZooPhy analysis API."""

    def adapter_target_label(self) -> str:
        """Return the upstream target for diagnostics.

        Returns:
            str: Human-readable upstream base URI.

        Raises:
            RuntimeError: Raised when target metadata is unavailable.
        """

    def adapter_validate_job(self, job_payload: dict[str, Any]) -> GatewayValidationResult:
        """Send a job to the dry-run validation endpoint.

        Args:
            job_payload: Serialized job body.

        Returns:
            GatewayValidationResult: Parsed validation response.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
            ValueError: Raised when the response body is malformed.
        """

    def adapter_run_job(self, job_payload: dict[str, Any]) -> GatewayRunResult:
        """Send a job to the run endpoint that starts remote computation.

        Args:
            job_payload: Serialized job body.

        Returns:
            GatewayRunResult: Raw run response status and body.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_close(self) -> None:
        """Release transport resources held by the adapter."""

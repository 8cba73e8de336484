"""Job-layer orchestrator for the two-phase ZooPhy submission protocol."""

from __future__ import annotations

import logging
from typing import Final

from zoophy_jobs.adapters import GatewayValidationResult, ZoophyAdapterError, ZoophyGatewayPort
from zoophy_jobs.domain import JobRequest

from .interfaces import (
    JobSubmissionPort,
    SubmissionAccepted,
    SubmissionGatewayError,
    SubmissionOutcome,
    SubmissionRejected,
    SubmissionState,
    SubmissionUnknownServiceError,
)

logger = logging.getLogger(__name__)

UNKNOWN_VALIDATION_ERROR: Final[str] = "Unknown ZooPhy API Error during Validation"
GATEWAY_VALIDATION_ERROR: Final[str] = "Failed to validate ZooPhy Job with ZooPhy API"


class JobSubmissionOrchestrator(JobSubmissionPort):
    """Concrete orchestrator running a dry-run validation before starting a job.

    The run endpoint is only called after the validate endpoint answered
    HTTP 200 with a null error. Both calls use the same serialized job body.
    """

    _VALIDATE_SUCCESS_STATUS: Final[int] = 200
    _RUN_ACCEPTED_STATUS: Final[int] = 202

    def __init__(self, gateway: ZoophyGatewayPort):
        """Initialize orchestrator dependencies.

        Args:
            gateway: Adapter for the remote ZooPhy API.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when gateway is None.
        """

        if gateway is None:
            raise ValueError("gateway must not be None")
        self._gateway = gateway

    def job_target_label(self) -> str:
        """Return the configured gateway target.

        Returns:
            str: Gateway target label.
        """

        return self._gateway.adapter_target_label()

    def job_close(self) -> None:
        """Release the gateway connection pool.

        Returns:
            None: Closes gateway resources as side effect.
        """

        self._gateway.adapter_close()

    def job_submit(self, job_request: JobRequest) -> SubmissionOutcome:
        """Validate then run one job against the remote service.

        Args:
            job_request: Fully validated job.

        Returns:
            SubmissionOutcome: Accepted, rejected, gateway error or unknown service error.

        Raises:
            RuntimeError: Raised only for unexpected non-adapter failures.
        """

        job_payload = job_request.job_request_to_payload()
        state = SubmissionState.IDLE
        state = self._job_transition(state, SubmissionState.VALIDATING)
        logger.info(
            "Parameters valid, testing ZooPhy Job with %d accessions for %s",
            len(job_request.accessions),
            job_request.reply_email,
        )

        try:
            validation_result = self._gateway.adapter_validate_job(job_payload=job_payload)
        except ZoophyAdapterError as error:
            logger.error("ZooPhy validation call failed: %s", error)
            self._job_transition(state, SubmissionState.GATEWAY_ERROR)
            return SubmissionGatewayError(reason=GATEWAY_VALIDATION_ERROR)

        if not self._job_validation_passed(validation_result):
            reason = validation_result.error or UNKNOWN_VALIDATION_ERROR
            logger.warning("ZooPhy Job rejected during validation: %s", reason)
            self._job_transition(state, SubmissionState.REJECTED)
            return SubmissionRejected(reason=reason)

        if validation_result.accessions_removed:
            logger.warning(
                "Accessions removed in job validation: %s",
                ", ".join(validation_result.accessions_removed),
            )
        state = self._job_transition(state, SubmissionState.RUNNING)
        logger.info(
            "Starting ZooPhy Job for %s with %d records",
            job_request.reply_email,
            len(validation_result.accessions_used),
        )

        try:
            run_result = self._gateway.adapter_run_job(job_payload=job_payload)
        except ZoophyAdapterError as error:
            logger.error("ZooPhy run call failed: %s", error)
            self._job_transition(state, SubmissionState.UNKNOWN_SERVICE_ERROR)
            return SubmissionUnknownServiceError()

        if run_result.status_code != self._RUN_ACCEPTED_STATUS:
            logger.error("ZooPhy run call returned HTTP %s: %s", run_result.status_code, run_result.body)
            self._job_transition(state, SubmissionState.UNKNOWN_SERVICE_ERROR)
            return SubmissionUnknownServiceError()

        self._job_transition(state, SubmissionState.ACCEPTED)
        logger.info("Job Started: %s", run_result.body)
        return SubmissionAccepted(
            job_size=len(validation_result.accessions_used),
            records_removed=validation_result.accessions_removed,
            tracking_message=run_result.body,
        )

    def _job_validation_passed(self, validation_result: GatewayValidationResult) -> bool:
        return validation_result.status_code == self._VALIDATE_SUCCESS_STATUS and validation_result.error is None

    def _job_transition(self, current_state: SubmissionState, next_state: SubmissionState) -> SubmissionState:
        logger.debug("Submission state %s -> %s", current_state.value, next_state.value)
        return next_state

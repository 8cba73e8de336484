"""Job API router composition for submission and upload endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, File, UploadFile, status
from fastapi.responses import JSONResponse

from zoophy_jobs.config import AppSettings
from zoophy_jobs.domain import (
    PredictorFileError,
    accession_format_upload_errors,
    accession_parse_upload_text,
    domain_predictor_groups_to_payload,
)
from zoophy_jobs.domain.validation_rules import ACCESSION_FILE_NAME_RULE, PREDICTOR_FILE_NAME_RULE
from zoophy_jobs.jobs import (
    JobSubmissionPort,
    SubmissionAccepted,
    SubmissionGatewayError,
    SubmissionOutcome,
    SubmissionRejected,
    UploadReadError,
    UploadRejectedError,
    job_assemble_request,
    predictor_parse_upload_file,
    upload_declaration_is_valid,
    upload_read_and_delete,
    upload_store_temporary,
)

logger = logging.getLogger(__name__)

PREDICTOR_CONTENT_TYPE = "text/tab-separated-values"
ACCESSION_CONTENT_TYPE = "text/plain"
UNKNOWN_START_ERROR = "Unknown ZooPhy API Error during Start"


def api_create_jobs_router(settings: AppSettings, submission_orchestrator: JobSubmissionPort) -> APIRouter:
    """Create job router with submission and file upload endpoints.

    Args:
        settings: Runtime settings for validation bounds and upload limits.
        submission_orchestrator: Orchestrator for the two-phase remote protocol.

    Returns:
        APIRouter: Router exposing `/job` APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if submission_orchestrator is None:
        raise ValueError("submission_orchestrator must not be None")

    router = APIRouter(prefix="/job", tags=["job"])
    upload_directory = Path(settings.upload_directory)

    @router.post("/run")
    def api_job_run(payload: Any = Body(default=None)) -> JSONResponse:
        """Validate a job request and submit it to the ZooPhy API.

        Args:
            payload: Raw JSON job body.

        Returns:
            JSONResponse: 202 when started, 200 with error on business rejection,
            400 on invalid input, 500 on remote failure.
        """

        try:
            if not isinstance(payload, dict):
                logger.warning("Malformed job request body")
                return _api_result(status.HTTP_400_BAD_REQUEST, error="Malformed job request")

            validation = job_assemble_request(
                payload,
                min_accessions=settings.job_min_accessions,
                max_accessions=settings.job_max_accessions,
                substitution_models=settings.substitution_models,
            )
            if not validation.validation_is_valid():
                logger.warning(validation.error_message)
                return _api_result(status.HTTP_400_BAD_REQUEST, error=validation.error_message)

            outcome = submission_orchestrator.job_submit(validation.job_request)
            return api_serialize_submission_outcome(outcome)
        except Exception:
            logger.exception("Failed to start ZooPhy Job")
            return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error="Failed to start ZooPhy Job")

    @router.post("/predictors")
    def api_job_predictors_upload(
        predictors_batch_file: UploadFile | None = File(default=None, alias="predictorsBatchFile"),
    ) -> JSONResponse:
        """Parse an uploaded predictor table into per-state GLM predictors.

        Args:
            predictors_batch_file: Uploaded tab-separated predictor table.

        Returns:
            JSONResponse: Predictor mapping or error payload.
        """

        try:
            if predictors_batch_file is None:
                logger.warning("Missing Predictor File")
                return _api_result(status.HTTP_400_BAD_REQUEST, error="Missing Predictor File")

            logger.info("Processing Predictor file upload...")
            if not upload_declaration_is_valid(
                filename=predictors_batch_file.filename,
                content_type=predictors_batch_file.content_type,
                expected_content_type=PREDICTOR_CONTENT_TYPE,
                filename_rule=PREDICTOR_FILE_NAME_RULE,
            ):
                logger.warning("Rejected Predictor file: %s", predictors_batch_file.filename)
                return _api_result(status.HTTP_400_BAD_REQUEST, error="Invalid Predictor File")

            stored_path = upload_store_temporary(
                source=predictors_batch_file.file,
                directory=upload_directory,
                max_bytes=settings.predictor_upload_max_bytes,
                suffix=".tsv",
            )
            predictors = predictor_parse_upload_file(stored_path)
            return _api_result(status.HTTP_200_OK, predictors=domain_predictor_groups_to_payload(predictors))
        except (PredictorFileError, UploadRejectedError) as error:
            logger.warning(str(error))
            return _api_result(status.HTTP_400_BAD_REQUEST, error=str(error))
        except UploadReadError as error:
            return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(error))
        except Exception:
            logger.exception("Failed to set Predictors")
            return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error="Failed to set Predictors")

    @router.post("/accessions")
    def api_job_accessions_upload(
        accession_file: UploadFile | None = File(default=None, alias="accessionFile"),
    ) -> JSONResponse:
        """Parse an uploaded accession list, one accession per line.

        Args:
            accession_file: Uploaded plain-text accession list.

        Returns:
            JSONResponse: Normalized accession list or error payload.
        """

        try:
            if accession_file is None:
                logger.warning("Missing Accession File")
                return _api_result(status.HTTP_400_BAD_REQUEST, error="Missing Accession File")

            logger.info("Processing Accession file upload...")
            if not upload_declaration_is_valid(
                filename=accession_file.filename,
                content_type=accession_file.content_type,
                expected_content_type=ACCESSION_CONTENT_TYPE,
                filename_rule=ACCESSION_FILE_NAME_RULE,
            ):
                logger.warning("Rejected Accession file: %s", accession_file.filename)
                return _api_result(status.HTTP_400_BAD_REQUEST, error="Invalid File")

            stored_path = upload_store_temporary(
                source=accession_file.file,
                directory=upload_directory,
                max_bytes=settings.accession_upload_max_bytes,
                suffix=".txt",
            )
            upload_result = accession_parse_upload_text(
                upload_read_and_delete(stored_path),
                line_limit=settings.accession_upload_line_limit,
            )
            if not upload_result.upload_is_valid():
                error_message = accession_format_upload_errors(upload_result)
                logger.warning(error_message)
                return _api_result(status.HTTP_400_BAD_REQUEST, error=error_message)
            return _api_result(status.HTTP_200_OK, accessions=list(upload_result.accessions))
        except UploadRejectedError as error:
            logger.warning(str(error))
            return _api_result(status.HTTP_400_BAD_REQUEST, error=str(error))
        except UploadReadError as error:
            return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(error))
        except Exception:
            logger.exception("Failed to process Accession upload")
            return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error="Failed to process Accession upload")

    return router


def api_serialize_submission_outcome(outcome: SubmissionOutcome) -> JSONResponse:
    """Map a terminal submission outcome to the caller-facing response.

    Args:
        outcome: Terminal outcome from the submission orchestrator.

    Returns:
        JSONResponse: Response carrying `status` in both HTTP status and body.
    """

    if isinstance(outcome, SubmissionAccepted):
        return _api_result(
            status.HTTP_202_ACCEPTED,
            message=outcome.tracking_message,
            jobSize=outcome.job_size,
            recordsRemoved=list(outcome.records_removed),
        )
    if isinstance(outcome, SubmissionRejected):
        return _api_result(status.HTTP_200_OK, error=outcome.reason)
    if isinstance(outcome, SubmissionGatewayError):
        return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error=outcome.reason)
    return _api_result(status.HTTP_500_INTERNAL_SERVER_ERROR, error=UNKNOWN_START_ERROR)


def _api_result(status_code: int, **fields: object) -> JSONResponse:
    return JSONResponse(content={"status": status_code, **fields}, status_code=status_code)

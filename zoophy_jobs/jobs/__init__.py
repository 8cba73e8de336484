"""Job layer package for request assembly, uploads and submission orchestration."""

from .interfaces import (
	JobSubmissionPort,
	SubmissionAccepted,
	SubmissionGatewayError,
	SubmissionOutcome,
	SubmissionRejected,
	SubmissionState,
	SubmissionUnknownServiceError,
)
from .request_assembly import BASE_ERROR, job_assemble_request, job_parse_predictor_groups
from .submission_orchestrator import JobSubmissionOrchestrator
from .upload_intake import (
	UploadReadError,
	UploadRejectedError,
	predictor_parse_upload_file,
	upload_declaration_is_valid,
	upload_delete,
	upload_read_and_delete,
	upload_store_temporary,
)

__all__ = [
	"BASE_ERROR",
	"JobSubmissionOrchestrator",
	"JobSubmissionPort",
	"SubmissionAccepted",
	"SubmissionGatewayError",
	"SubmissionOutcome",
	"SubmissionRejected",
	"SubmissionState",
	"SubmissionUnknownServiceError",
	"UploadReadError",
	"UploadRejectedError",
	"job_assemble_request",
	"job_parse_predictor_groups",
	"predictor_parse_upload_file",
	"upload_declaration_is_valid",
	"upload_delete",
	"upload_read_and_delete",
	"upload_store_temporary",
]

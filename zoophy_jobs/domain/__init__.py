"""Domain models, field rules and pure parsers used across application layers."""

from .accession_parsing import accession_format_upload_errors, accession_parse_upload_text
from .models import (
    AccessionUploadResult,
    AppMetadata,
    JobRequest,
    JobRequestValidation,
    Predictor,
    XmlOptions,
    domain_predictor_groups_to_payload,
)
from .predictor_parsing import PredictorFileError, predictor_parse_table

__all__ = [
    "AccessionUploadResult",
    "AppMetadata",
    "JobRequest",
    "JobRequestValidation",
    "Predictor",
    "PredictorFileError",
    "XmlOptions",
    "accession_format_upload_errors",
    "accession_parse_upload_text",
    "domain_predictor_groups_to_payload",
    "predictor_parse_table",
]

"""Accession list upload parsing."""

from __future__ import annotations

from .models import AccessionUploadResult
from .validation_rules import (
    ACCESSION_BARE_RULE,
    ACCESSION_RULE,
    ACCESSION_VERSIONED_RULE,
    STRING_TYPE,
    validation_check_input,
)


def accession_parse_upload_text(raw_text: str, line_limit: int) -> AccessionUploadResult:
    """Parse one accession per line, stripping version suffixes.

    Lines beyond `line_limit` are ignored. Unlike job validation, every bad
    line is reported rather than only the first.

    Args:
        raw_text: Decoded upload text.
        line_limit: Maximum number of lines read.

    Returns:
        AccessionUploadResult: Normalized accessions and per-line errors.

    Raises:
        ValueError: Raised when line_limit is not positive.
    """

    if line_limit < 1:
        raise ValueError("line_limit must be >= 1")

    accessions: list[str] = []
    line_errors: list[str] = []
    for line_index, raw_line in enumerate(raw_text.strip().splitlines()[:line_limit]):
        candidate = raw_line.strip()
        accession = _accession_normalize(candidate)
        if accession is None:
            line_errors.append(f'"{candidate}" on line #{line_index + 1}')
        else:
            accessions.append(accession)

    return AccessionUploadResult(accessions=tuple(accessions), line_errors=tuple(line_errors))


def _accession_normalize(candidate: str) -> str | None:
    """Return the bare accession for one upload line.

    Only the trailing version suffix is removed, and the result must still
    be accepted by the job accession rule.

    Args:
        candidate: Stripped upload line.

    Returns:
        str | None: Bare accession, or None when the line is rejected.
    """

    if validation_check_input(candidate, STRING_TYPE, ACCESSION_BARE_RULE):
        return candidate
    if not validation_check_input(candidate, STRING_TYPE, ACCESSION_VERSIONED_RULE):
        return None
    accession = candidate.rpartition(".")[0]
    if not validation_check_input(accession, STRING_TYPE, ACCESSION_RULE):
        return None
    return accession


def accession_format_upload_errors(upload_result: AccessionUploadResult) -> str:
    """Build the caller-facing message for rejected accession lines.

    Args:
        upload_result: Parse result holding at least one line error.

    Returns:
        str: Single message listing every rejected line.

    Raises:
        ValueError: Raised when the result has no line errors.
    """

    if upload_result.upload_is_valid():
        raise ValueError("upload_result must include line errors")
    return "Invalid Accession(s): " + ", ".join(upload_result.line_errors)


__all__ = ["accession_format_upload_errors", "accession_parse_upload_text"]

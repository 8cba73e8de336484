"""Scoped temporary storage for uploaded predictor and accession files.

Accepted uploads are written to a temporary file under the configured upload
directory and removed again as soon as they are read, on every exit path.
"""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path
from typing import BinaryIO

from zoophy_jobs.domain import Predictor, predictor_parse_table
from zoophy_jobs.domain.validation_rules import STRING_TYPE, validation_check_input

logger = logging.getLogger(__name__)


class UploadRejectedError(ValueError):
    """Raised when an upload fails its declared type, name, size or encoding checks."""


class UploadReadError(RuntimeError):
    """Raised when a stored upload cannot be read back."""


def upload_declaration_is_valid(
    filename: str | None,
    content_type: str | None,
    expected_content_type: str,
    filename_rule: re.Pattern[str],
) -> bool:
    """Return whether an upload declares the expected media type and an allowed name.

    Args:
        filename: Client-supplied original filename.
        content_type: Client-declared media type, parameters allowed.
        expected_content_type: Required media type.
        filename_rule: Allow-list rule for the original filename.

    Returns:
        bool: True when both checks pass.
    """

    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type == expected_content_type and validation_check_input(filename, STRING_TYPE, filename_rule)


def upload_store_temporary(source: BinaryIO, directory: Path, max_bytes: int, suffix: str) -> Path:
    """Copy an upload stream into a new temporary file.

    Args:
        source: Readable binary upload stream.
        directory: Upload storage directory, created when missing.
        max_bytes: Maximum accepted payload size.
        suffix: File suffix for the stored copy.

    Returns:
        Path: Location of the stored copy. The caller owns its deletion.

    Raises:
        UploadRejectedError: Raised when the payload exceeds max_bytes.
    """

    payload = source.read(max_bytes + 1)
    if len(payload) > max_bytes:
        raise UploadRejectedError(f"Uploaded file exceeds {max_bytes} bytes")

    directory.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(mode="wb", dir=directory, suffix=suffix, delete=False) as stored_file:
        stored_path = Path(stored_file.name)
        try:
            stored_file.write(payload)
        except OSError:
            upload_delete(stored_path)
            raise
    return stored_path


def upload_read_and_delete(file_path: Path) -> str:
    """Read a stored upload as UTF-8 text and delete it.

    Args:
        file_path: Stored upload location.

    Returns:
        str: Decoded file text.

    Raises:
        UploadReadError: Raised when the file cannot be read.
        UploadRejectedError: Raised when the file is not UTF-8 text.
    """

    try:
        payload = file_path.read_bytes()
    except OSError as error:
        logger.error("Failed to read uploaded file %s: %s", file_path, error)
        raise UploadReadError("Failed to read uploaded file") from error
    finally:
        upload_delete(file_path)

    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as error:
        raise UploadRejectedError("Uploaded file is not UTF-8 text") from error


def upload_delete(file_path: Path) -> None:
    """Delete a stored upload, logging instead of raising on failure.

    Args:
        file_path: Stored upload location.

    Returns:
        None: Deletes the file as side effect.
    """

    try:
        file_path.unlink()
    except OSError as error:
        logger.warning("Failed to delete uploaded file %s: %s", file_path, error)
    else:
        logger.info("Deleted uploaded file %s", file_path)


def predictor_parse_upload_file(file_path: Path) -> dict[str, tuple[Predictor, ...]]:
    """Parse a stored predictor upload, deleting it on every exit path.

    Args:
        file_path: Stored predictor table location.

    Returns:
        dict[str, tuple[Predictor, ...]]: Predictors keyed by state.

    Raises:
        UploadReadError: Raised when the file cannot be read.
        UploadRejectedError: Raised when the file is not UTF-8 text.
        PredictorFileError: Raised when table content is invalid.
    """

    return predictor_parse_table(upload_read_and_delete(file_path))


__all__ = [
    "UploadReadError",
    "UploadRejectedError",
    "predictor_parse_upload_file",
    "upload_declaration_is_valid",
    "upload_delete",
    "upload_read_and_delete",
    "upload_store_temporary",
]

"""Named field rules and the shared input predicate used by every validator."""

from __future__ import annotations

import math
import re
from typing import Final, Iterable

# All rules are matched against the full value with `re.fullmatch`.
ACCESSION_RULE: Final[re.Pattern[str]] = re.compile(r"[A-Z0-9_.]{5,10}")
ACCESSION_BARE_RULE: Final[re.Pattern[str]] = re.compile(r"[A-Z0-9]{5,10}")
ACCESSION_VERSIONED_RULE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_.]{5,10}\.\d{1,2}")
EMAIL_RULE: Final[re.Pattern[str]] = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
JOB_NAME_RULE: Final[re.Pattern[str]] = re.compile(r"[\w \-#&]{3,255}", re.ASCII)
STATE_RULE: Final[re.Pattern[str]] = re.compile(r"[\w\-.,' ]{1,255}", re.ASCII)
PREDICTOR_NAME_RULE: Final[re.Pattern[str]] = re.compile(r"[\w\-. ]{1,255}", re.ASCII)
SEARCH_QUERY_RULE: Final[re.Pattern[str]] = re.compile(r"[\w :\[\]()]{5,5000}", re.ASCII)
PREDICTOR_FILE_NAME_RULE: Final[re.Pattern[str]] = re.compile(r"[\w\-.]{1,250}\.tsv", re.ASCII)
ACCESSION_FILE_NAME_RULE: Final[re.Pattern[str]] = re.compile(r"[\w\-.]{1,250}\.txt", re.ASCII)

STRING_TYPE: Final[str] = "string"
NUMBER_TYPE: Final[str] = "number"


def validation_check_input(value: object, expected_type: str, rule: re.Pattern[str] | None = None) -> bool:
    """Check one raw value against an expected type and optional full-match rule.

    Strings must be `str` instances and, when a rule is given, match it in
    full. Numbers must be finite `int` or `float` values; booleans and numeric
    strings are rejected and the rule argument is not consulted.

    Args:
        value: Raw candidate value.
        expected_type: Either `"string"` or `"number"`.
        rule: Optional compiled pattern for string values.

    Returns:
        bool: True when the value satisfies the type and rule.
    """

    if expected_type == STRING_TYPE:
        if not isinstance(value, str):
            return False
        return rule is None or rule.fullmatch(value) is not None

    if expected_type == NUMBER_TYPE:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return math.isfinite(value)

    return False


def validation_build_model_rule(substitution_models: Iterable[str]) -> re.Pattern[str]:
    """Build a closed-enum rule matching exactly one configured model literal.

    Args:
        substitution_models: Accepted substitution model names.

    Returns:
        re.Pattern[str]: Alternation of the escaped literals.

    Raises:
        ValueError: Raised when no model is configured.
    """

    literals = [re.escape(model) for model in substitution_models]
    if not literals:
        raise ValueError("substitution_models must not be empty")
    return re.compile("|".join(literals))


__all__ = [
    "ACCESSION_BARE_RULE",
    "ACCESSION_FILE_NAME_RULE",
    "ACCESSION_RULE",
    "ACCESSION_VERSIONED_RULE",
    "EMAIL_RULE",
    "JOB_NAME_RULE",
    "NUMBER_TYPE",
    "PREDICTOR_FILE_NAME_RULE",
    "PREDICTOR_NAME_RULE",
    "SEARCH_QUERY_RULE",
    "STATE_RULE",
    "STRING_TYPE",
    "validation_build_model_rule",
    "validation_check_input",
]

"""Job request field validation, error aggregation and normalization."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Final

from zoophy_jobs.domain import JobRequest, JobRequestValidation, Predictor, XmlOptions
from zoophy_jobs.domain.validation_rules import (
    ACCESSION_RULE,
    EMAIL_RULE,
    JOB_NAME_RULE,
    NUMBER_TYPE,
    PREDICTOR_NAME_RULE,
    STATE_RULE,
    STRING_TYPE,
    validation_build_model_rule,
    validation_check_input,
)

logger = logging.getLogger(__name__)

BASE_ERROR: Final[str] = "INVALID JOB PARAMETER(S): "
PREDICTOR_ENTRY_FIELDS: Final[frozenset[str]] = frozenset({"state", "name", "value", "year"})
_ERROR_SEPARATOR: Final[str] = ", "


def job_assemble_request(
    payload: Mapping[str, Any],
    min_accessions: int = 5,
    max_accessions: int = 1000,
    substitution_models: tuple[str, ...] = ("HKY",),
) -> JobRequestValidation:
    """Validate every job field and build a normalized job when all pass.

    Every field is checked independently and each failure adds one fragment
    to the aggregated message. Only the accession loop stops early, on the
    first invalid accession.

    Args:
        payload: Raw decoded JSON job body.
        min_accessions: Minimum accepted accession count.
        max_accessions: Maximum accepted accession count.
        substitution_models: Accepted substitution model literals.

    Returns:
        JobRequestValidation: Normalized job or aggregated error message.

    Raises:
        ValueError: Raised when substitution_models is empty.
    """

    model_rule = validation_build_model_rule(substitution_models)
    error_fragments: list[str] = []

    accessions = _job_collect_accessions(payload.get("accessions"), min_accessions, max_accessions, error_fragments)

    reply_email = None
    raw_email = payload.get("replyEmail")
    if not raw_email:
        error_fragments.append("Missing Reply Email")
    elif validation_check_input(raw_email, STRING_TYPE, EMAIL_RULE):
        reply_email = raw_email
    else:
        error_fragments.append(f"Invalid Email: {raw_email}")

    job_name = None
    raw_job_name = payload.get("jobName")
    if raw_job_name:
        if validation_check_input(raw_job_name, STRING_TYPE, JOB_NAME_RULE):
            job_name = raw_job_name
        else:
            error_fragments.append(f"Invalid Job Name: {raw_job_name}")

    use_glm = payload.get("useGLM") is True
    predictors = None
    raw_predictors = payload.get("predictors")
    if use_glm and raw_predictors is not None:
        logger.info("Job is using Custom Predictors")
        predictors = job_parse_predictor_groups(raw_predictors)
        if predictors is None:
            error_fragments.append("Invalid Custom Job Predictors")

    xml_options = None
    raw_xml_options = payload.get("xmlOptions")
    if raw_xml_options is None:
        error_fragments.append("Missing XML Parameters")
    else:
        xml_options = _job_parse_xml_options(raw_xml_options, model_rule)
        if xml_options is None:
            error_fragments.append("Invalid XML Parameters")

    if error_fragments:
        return JobRequestValidation(error_message=BASE_ERROR + _ERROR_SEPARATOR.join(error_fragments))

    return JobRequestValidation(
        job_request=JobRequest(
            accessions=accessions,
            reply_email=reply_email,
            job_name=job_name,
            use_glm=use_glm,
            predictors=predictors,
            xml_options=xml_options,
        )
    )


def job_parse_predictor_groups(raw_predictors: Any) -> dict[str, tuple[Predictor, ...]] | None:
    """Validate a client predictor payload and convert it to typed predictors.

    Args:
        raw_predictors: Mapping of state to predictor entry lists.

    Returns:
        dict[str, tuple[Predictor, ...]] | None: Typed predictors, or None when any entry fails.
    """

    if not isinstance(raw_predictors, Mapping):
        return None

    predictors: dict[str, tuple[Predictor, ...]] = {}
    for state, raw_entries in raw_predictors.items():
        if not validation_check_input(state, STRING_TYPE, STATE_RULE) or not isinstance(raw_entries, list):
            return None
        state_predictors: list[Predictor] = []
        for raw_entry in raw_entries:
            predictor = _job_parse_predictor_entry(state, raw_entry)
            if predictor is None:
                return None
            state_predictors.append(predictor)
        predictors[state] = tuple(state_predictors)
    return predictors


def _job_collect_accessions(
    raw_accessions: Any,
    min_accessions: int,
    max_accessions: int,
    error_fragments: list[str],
) -> tuple[str, ...] | None:
    """Validate the accession list, appending at most one error fragment.

    Args:
        raw_accessions: Raw accession list value.
        min_accessions: Minimum accepted count.
        max_accessions: Maximum accepted count.
        error_fragments: Shared error accumulator.

    Returns:
        tuple[str, ...] | None: Accessions when valid, otherwise None.
    """

    if raw_accessions is None:
        error_fragments.append("Missing Accessions")
        return None
    if not isinstance(raw_accessions, list):
        error_fragments.append(f"Invalid Accessions: {raw_accessions}")
        return None
    if len(raw_accessions) < min_accessions or len(raw_accessions) > max_accessions:
        error_fragments.append(f"Invalid number of Accessions: {len(raw_accessions)}")
        return None

    for raw_accession in raw_accessions:
        if not validation_check_input(raw_accession, STRING_TYPE, ACCESSION_RULE):
            error_fragments.append(f"Invalid Accession: {raw_accession}")
            return None
    return tuple(raw_accessions)


def _job_parse_predictor_entry(state: str, raw_entry: Any) -> Predictor | None:
    """Validate one predictor entry belonging to a state group.

    Args:
        state: Group key the entry is listed under.
        raw_entry: Raw `{state, name, value, year}` object.

    Returns:
        Predictor | None: Typed predictor, or None when any field fails.
    """

    if not isinstance(raw_entry, Mapping) or set(raw_entry) != PREDICTOR_ENTRY_FIELDS:
        return None
    if raw_entry["state"] != state:
        return None
    if not validation_check_input(raw_entry["name"], STRING_TYPE, PREDICTOR_NAME_RULE):
        return None
    if not validation_check_input(raw_entry["value"], NUMBER_TYPE):
        return None
    # Time-varying predictors are not supported yet.
    if raw_entry["year"] is not None:
        return None
    return Predictor(group=state, name=raw_entry["name"], value=raw_entry["value"])


def _job_parse_xml_options(raw_xml_options: Any, model_rule: re.Pattern[str]) -> XmlOptions | None:
    """Validate analysis options as one unit.

    Args:
        raw_xml_options: Raw options object.
        model_rule: Closed-enum substitution model rule.

    Returns:
        XmlOptions | None: Options when all three fields are valid, otherwise None.
    """

    if not isinstance(raw_xml_options, Mapping):
        return None
    chain_length = raw_xml_options.get("chainLength")
    sub_sample_rate = raw_xml_options.get("subSampleRate")
    substitution_model = raw_xml_options.get("substitutionModel")
    if not (
        validation_check_input(chain_length, NUMBER_TYPE)
        and validation_check_input(sub_sample_rate, NUMBER_TYPE)
        and validation_check_input(substitution_model, STRING_TYPE, model_rule)
    ):
        return None
    return XmlOptions(
        chain_length=chain_length,
        sub_sample_rate=sub_sample_rate,
        substitution_model=substitution_model,
    )


__all__ = ["BASE_ERROR", "PREDICTOR_ENTRY_FIELDS", "job_assemble_request", "job_parse_predictor_groups"]

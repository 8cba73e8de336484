"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
or runs one job-layer command from the shell.
"""

import argparse
import json
from pathlib import Path

import uvicorn

from zoophy_jobs.api.routers import api_serialize_submission_outcome
from zoophy_jobs.bootstrap import bootstrap_create_application, bootstrap_create_submission_orchestrator
from zoophy_jobs.config import config_load_settings
from zoophy_jobs.domain import PredictorFileError, domain_predictor_groups_to_payload, predictor_parse_table
from zoophy_jobs.jobs import job_assemble_request
from zoophy_jobs.logging_config import logging_configure


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a job command does not succeed.
    """

    argument_parser = argparse.ArgumentParser(description="ZooPhy job submission runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "job-submit", "predictors-parse"),
        help="Runtime command: `api` starts server, `job-submit` validates and submits one JSON job payload, "
        "`predictors-parse` parses one predictor table",
        type=str,
    )
    argument_parser.add_argument(
        "--payload",
        dest="payload_path",
        type=Path,
        help="JSON job payload file for `job-submit`",
    )
    argument_parser.add_argument(
        "--file",
        dest="predictor_path",
        type=Path,
        help="Tab-separated predictor table for `predictors-parse`; the file is kept",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "job-submit":
        if parsed_arguments.payload_path is None:
            argument_parser.error("--payload is required for job-submit")
        raise SystemExit(main_submit_job(parsed_arguments.payload_path))

    if parsed_arguments.command == "predictors-parse":
        if parsed_arguments.predictor_path is None:
            argument_parser.error("--file is required for predictors-parse")
        raise SystemExit(main_parse_predictors(parsed_arguments.predictor_path))

    settings = config_load_settings()
    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_submit_job(payload_path: Path) -> int:
    """Validate and submit one job payload file, printing the caller-facing result.

    Args:
        payload_path: JSON job payload location.

    Returns:
        int: Process exit code, 0 only when the job was started.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        OSError: Raised when the payload file cannot be read.
    """

    settings = config_load_settings()
    logging_configure(settings.log_level)
    try:
        payload = json.loads(payload_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        print(json.dumps({"status": 400, "error": f"Malformed job request: {error}"}))
        return 1
    if not isinstance(payload, dict):
        print(json.dumps({"status": 400, "error": "Malformed job request"}))
        return 1

    validation = job_assemble_request(
        payload,
        min_accessions=settings.job_min_accessions,
        max_accessions=settings.job_max_accessions,
        substitution_models=settings.substitution_models,
    )
    if not validation.validation_is_valid():
        print(json.dumps({"status": 400, "error": validation.error_message}))
        return 1

    orchestrator = bootstrap_create_submission_orchestrator(settings=settings)
    try:
        outcome = orchestrator.job_submit(validation.job_request)
    finally:
        orchestrator.job_close()
    response = api_serialize_submission_outcome(outcome)
    print(response.body.decode("utf-8"))
    return 0 if response.status_code == 202 else 1


def main_parse_predictors(predictor_path: Path) -> int:
    """Parse one predictor table and print the predictor mapping as JSON.

    Args:
        predictor_path: Tab-separated predictor table location.

    Returns:
        int: Process exit code, 1 when the table is invalid.

    Raises:
        OSError: Raised when the file cannot be read.
    """

    try:
        predictors = predictor_parse_table(predictor_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError:
        print(json.dumps({"status": 400, "error": "Predictor file is not UTF-8 text"}))
        return 1
    except PredictorFileError as error:
        print(json.dumps({"status": 400, "error": str(error)}))
        return 1
    print(json.dumps({"status": 200, "predictors": domain_predictor_groups_to_payload(predictors)}, indent=2))
    return 0


if __name__ == "__main__":
    main()

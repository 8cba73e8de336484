"""Typed domain models shared across runtime layers.

Every model is an immutable, request-scoped value. A `JobRequest` is only
ever built from a payload that passed every field rule.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppMetadata:
    """Static application metadata for runtime identification.

    Attributes:
        application_name: Human-readable app name.
        environment_name: Runtime environment label.
    """

    application_name: str
    environment_name: str


@dataclass(frozen=True)
class Predictor:
    """One named numeric GLM covariate attached to a group (state).

    Attributes:
        group: Group/state label the value belongs to.
        name: Predictor name.
        value: Numeric predictor value.
    """

    group: str
    name: str
    value: float

    def predictor_to_payload(self) -> dict[str, object]:
        """Serialize predictor to the wire shape used by clients and the ZooPhy API.

        Returns:
            dict[str, object]: `{state, name, value, year}` payload with null year.
        """

        return {"state": self.group, "name": self.name, "value": self.value, "year": None}


def domain_predictor_groups_to_payload(
    predictors: dict[str, tuple[Predictor, ...]],
) -> dict[str, list[dict[str, object]]]:
    """Serialize grouped predictors to the wire shape.

    Args:
        predictors: Predictors keyed by state.

    Returns:
        dict[str, list[dict[str, object]]]: JSON-serializable mapping.
    """

    return {
        group: [predictor.predictor_to_payload() for predictor in group_predictors]
        for group, group_predictors in predictors.items()
    }


@dataclass(frozen=True)
class XmlOptions:
    """Analysis run parameters forwarded to the remote job builder.

    Attributes:
        chain_length: MCMC chain length.
        sub_sample_rate: Sampling frequency for chain output.
        substitution_model: Nucleotide substitution model literal.
    """

    chain_length: int | float
    sub_sample_rate: int | float
    substitution_model: str

    def xml_options_to_payload(self) -> dict[str, object]:
        """Serialize options to the remote API wire shape.

        Returns:
            dict[str, object]: Camel-cased options payload.
        """

        return {
            "chainLength": self.chain_length,
            "subSampleRate": self.sub_sample_rate,
            "substitutionModel": self.substitution_model,
        }


@dataclass(frozen=True)
class JobRequest:
    """Normalized, fully validated job submission.

    Attributes:
        accessions: Ordered accession identifiers.
        reply_email: Address notified about job progress.
        job_name: Optional human-readable job label.
        use_glm: Whether the job uses a GLM with custom predictors.
        predictors: Optional predictors grouped by state.
        xml_options: Analysis run parameters.
    """

    accessions: tuple[str, ...]
    reply_email: str
    xml_options: XmlOptions
    job_name: str | None = None
    use_glm: bool = False
    predictors: dict[str, tuple[Predictor, ...]] | None = None

    def job_request_to_payload(self) -> dict[str, object]:
        """Serialize job to the JSON body sent to both remote phases.

        Returns:
            dict[str, object]: JSON-serializable job payload.
        """

        predictors_payload = None
        if self.predictors is not None:
            predictors_payload = domain_predictor_groups_to_payload(self.predictors)
        return {
            "accessions": list(self.accessions),
            "replyEmail": self.reply_email,
            "jobName": self.job_name,
            "useGLM": self.use_glm,
            "predictors": predictors_payload,
            "xmlOptions": self.xml_options.xml_options_to_payload(),
        }


@dataclass(frozen=True)
class JobRequestValidation:
    """Outcome of assembling a job request from a raw payload.

    Exactly one of `job_request` and `error_message` is set.

    Attributes:
        job_request: Normalized job when every field is valid.
        error_message: Aggregated field-by-field failure message otherwise.
    """

    job_request: JobRequest | None = None
    error_message: str | None = None

    def __post_init__(self) -> None:
        if (self.job_request is None) == (self.error_message is None):
            raise ValueError("exactly one of job_request and error_message must be set")

    def validation_is_valid(self) -> bool:
        """Return whether the payload produced a usable job request.

        Returns:
            bool: True when a job request was constructed.
        """

        return self.job_request is not None


@dataclass(frozen=True)
class AccessionUploadResult:
    """Outcome of parsing an uploaded accession list.

    Attributes:
        accessions: Normalized accessions in file order.
        line_errors: Human-readable descriptions of rejected lines.
    """

    accessions: tuple[str, ...]
    line_errors: tuple[str, ...]

    def upload_is_valid(self) -> bool:
        """Return whether every read line held a valid accession.

        Returns:
            bool: True when no line was rejected.
        """

        return not self.line_errors

"""ZooPhy API adapter implementation for job validation and start calls."""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx

from .interfaces import GatewayRunResult, GatewayValidationResult, ZoophyGatewayPort
from .zoophy_errors import ZoophyAdapterConnectionError, ZoophyAdapterTimeoutError, ZoophyResponseError

logger = logging.getLogger(__name__)


class ZoophyApiAdapter(ZoophyGatewayPort):
    """Adapter implementation for the ZooPhy API `validate` and `run` endpoints."""

    _USER_AGENT: Final[str] = "zoophy-jobs/1.0 (Python/httpx)"
    _VALIDATE_PATH: Final[str] = "/validate"
    _RUN_PATH: Final[str] = "/run"

    def __init__(
        self,
        base_url: str,
        request_timeout_seconds: float = 30.0,
        http_client: httpx.Client | None = None,
    ):
        """Initialize ZooPhy API adapter.

        Args:
            base_url: Base URI of the ZooPhy API.
            request_timeout_seconds: HTTP request timeout in seconds.
            http_client: Optional preconfigured client, mainly for tests.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = base_url.strip()
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._client = http_client or httpx.Client(
            timeout=request_timeout_seconds,
            headers={"User-Agent": self._USER_AGENT},
        )

    def adapter_target_label(self) -> str:
        """Return configured upstream base URI.

        Returns:
            str: Base URI without trailing slash.
        """

        return self._base_url

    def adapter_validate_job(self, job_payload: dict[str, Any]) -> GatewayValidationResult:
        """Post a job to the dry-run validation endpoint and parse the verdict.

        Args:
            job_payload: Serialized job body.

        Returns:
            GatewayValidationResult: Status code, remote error and accession split.

        Raises:
            ZoophyAdapterConnectionError: Raised for transport failures.
            ZoophyAdapterTimeoutError: Raised when the call times out.
            ZoophyResponseError: Raised when the body is not the expected JSON object.
        """

        response = self._adapter_http_post(path=self._VALIDATE_PATH, job_payload=job_payload)
        try:
            response_body = response.json()
        except ValueError as error:
            raise ZoophyResponseError(
                "ZooPhy validate response is not valid JSON",
                status_code=response.status_code,
            ) from error
        if not isinstance(response_body, dict):
            raise ZoophyResponseError(
                "ZooPhy validate response must be a JSON object",
                status_code=response.status_code,
            )

        raw_error = response_body.get("error")
        return GatewayValidationResult(
            status_code=response.status_code,
            error=None if raw_error is None else str(raw_error),
            accessions_used=self._adapter_parse_accession_list(response_body, "accessionsUsed", response.status_code),
            accessions_removed=self._adapter_parse_accession_list(
                response_body, "accessionsRemoved", response.status_code
            ),
        )

    def adapter_run_job(self, job_payload: dict[str, Any]) -> GatewayRunResult:
        """Post a job to the run endpoint.

        Args:
            job_payload: Serialized job body.

        Returns:
            GatewayRunResult: Raw status code and response text.

        Raises:
            ZoophyAdapterConnectionError: Raised for transport failures.
            ZoophyAdapterTimeoutError: Raised when the call times out.
        """

        response = self._adapter_http_post(path=self._RUN_PATH, job_payload=job_payload)
        return GatewayRunResult(status_code=response.status_code, body=response.text)

    def adapter_close(self) -> None:
        """Release pooled HTTP connections."""

        self._client.close()

    def _adapter_http_post(self, path: str, job_payload: dict[str, Any]) -> httpx.Response:
        """Execute one JSON POST and return the response regardless of status.

        Args:
            path: Endpoint path relative to the base URI.
            job_payload: JSON body.

        Returns:
            httpx.Response: Upstream response.

        Raises:
            ZoophyAdapterConnectionError: Raised for network failures.
            ZoophyAdapterTimeoutError: Raised when the call times out.
        """

        url = f"{self._base_url}{path}"
        try:
            response = self._client.post(url, json=job_payload)
        except httpx.TimeoutException as error:
            raise ZoophyAdapterTimeoutError(f"ZooPhy API request timed out: {path}") from error
        except httpx.HTTPError as error:
            raise ZoophyAdapterConnectionError(f"ZooPhy API request failed: {path}") from error

        logger.debug("ZooPhy API %s responded with HTTP %s", path, response.status_code)
        return response

    def _adapter_parse_accession_list(
        self,
        response_body: dict[str, Any],
        field_name: str,
        status_code: int,
    ) -> tuple[str, ...]:
        """Read one optional accession list field from a validate response.

        Args:
            response_body: Parsed response object.
            field_name: Field to read.
            status_code: Upstream status, attached to raised errors.

        Returns:
            tuple[str, ...]: Accessions, empty when the field is absent or null.

        Raises:
            ZoophyResponseError: Raised when the field is present but not a list.
        """

        raw_value = response_body.get(field_name)
        if raw_value is None:
            return ()
        if not isinstance(raw_value, list):
            raise ZoophyResponseError(f"ZooPhy validate field {field_name} must be a list", status_code=status_code)
        return tuple(str(accession) for accession in raw_value)

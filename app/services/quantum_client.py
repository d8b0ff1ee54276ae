"""Quantum simulation client.

Requests a simulation run from the external service via:
POST https://schrodice40.com/api/quantum  {"shots": 65536}

The service answers with a JSON object whose ``probabilities`` field maps
bitstring states to their measured probability.
"""

import logging
from typing import Any

import requests

from app.config import DEFAULT_SHOTS, QUANTUM_API_URL, REQUEST_TIMEOUT
from app.services.distribution_engine import (
    InvalidDistributionError,
    validate_distribution,
)

logger = logging.getLogger(__name__)


class QuantumFetchError(Exception):
    """Raised when the quantum simulation data cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(QuantumFetchError):
    """The simulation service answered with an error status or bad payload."""


class NetworkError(QuantumFetchError):
    """The request to the simulation service did not complete."""


def fetch_quantum_data(
    url: str = QUANTUM_API_URL,
    shots: int = DEFAULT_SHOTS,
    timeout: float = REQUEST_TIMEOUT,
) -> dict[str, Any]:
    """Run one simulation on the external service.

    Args:
        url: Simulation endpoint
        shots: Number of measurement shots to request
        timeout: Request timeout in seconds

    Returns:
        The upstream JSON object, unmodified

    Raises:
        UpstreamError: Non-2xx status or a body that is not a JSON object
        NetworkError: The request itself failed (DNS, timeout, reset)
    """
    logger.debug("Requesting %d shots from %s", shots, url)
    try:
        response = requests.post(
            url,
            json={"shots": shots},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("Error fetching quantum data: %s", e)
        raise NetworkError(f"Request to quantum API failed: {e}") from e

    if not response.ok:
        logger.error("Quantum API responded with status %d", response.status_code)
        raise UpstreamError(
            f"API responded with status: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Quantum API returned invalid JSON: %s", e)
        raise UpstreamError(
            f"API returned invalid JSON: {e}", status_code=response.status_code
        ) from e

    if not isinstance(data, dict):
        raise UpstreamError(
            f"API returned {type(data).__name__}, expected a JSON object",
            status_code=response.status_code,
        )

    return data


def extract_probabilities(payload: dict[str, Any]) -> dict[str, float]:
    """Pull the validated ``probabilities`` mapping out of *payload*.

    Raises:
        InvalidDistributionError: Field missing or malformed
    """
    if "probabilities" not in payload:
        raise InvalidDistributionError("Response has no 'probabilities' field")
    return validate_distribution(payload["probabilities"])

"""JSON-over-HTTP helper shared by the REST provider adapters.

Translates every ``requests`` failure mode into the provider error family so the
adapters only deal with payload shapes.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from terusrag.domain.errors import MalformedResponseError, ProviderTransportError

logger = logging.getLogger(__name__)


def post_json(
    session: requests.Session,
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str],
    timeout: float,
    provider: str,
    operation: str,
) -> dict[str, Any]:
    """POST ``payload`` and return the decoded JSON object.

    Raises:
        ProviderTransportError: Connection failure, timeout, or non-2xx status
        MalformedResponseError: Body is not a JSON object
    """
    try:
        response = session.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.Timeout as ex:
        logger.error("%s %s request timed out after %ss", provider, operation, timeout)
        raise ProviderTransportError(
            f"request timed out after {timeout}s", provider=provider, operation=operation
        ) from ex
    except requests.RequestException as ex:
        logger.error("%s %s request failed: %s", provider, operation, ex)
        raise ProviderTransportError(str(ex), provider=provider, operation=operation) from ex

    if not 200 <= response.status_code < 300:
        body = (response.text or "")[:500]
        logger.error("%s %s returned HTTP %s: %s", provider, operation, response.status_code, body)
        raise ProviderTransportError(
            body or "unexpected status",
            provider=provider,
            operation=operation,
            status=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as ex:
        raise MalformedResponseError(
            f"JSON decode error: {ex}", provider=provider, operation=operation
        ) from ex
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"expected a JSON object, got {type(data).__name__}",
            provider=provider,
            operation=operation,
        )
    return data


def as_vector(values: Any, *, provider: str, operation: str) -> list[float]:
    """Coerce one embedding from a payload into a list of floats."""
    if not isinstance(values, list):
        raise MalformedResponseError(
            f"embedding is not a list: {type(values).__name__}",
            provider=provider,
            operation=operation,
        )
    try:
        return [float(x) for x in values]
    except (TypeError, ValueError) as ex:
        raise MalformedResponseError(
            f"embedding has non-numeric values: {ex}", provider=provider, operation=operation
        ) from ex

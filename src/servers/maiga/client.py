"""Async HTTP client for the Maiga partner API.

Every call is a single JSON POST authenticated with the ``X-PARTNER-TOKEN``
header. There is no retry, caching or token refresh: a response is either
decoded and returned, or turned into one of the exceptions in
``exceptions.py``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .config import MaigaSettings
from .exceptions import (
    MaigaAPIError,
    MaigaRateLimitError,
    MaigaResponseParseError,
    MaigaTransportError,
)

logger = logging.getLogger(__name__)

PARTNER_TOKEN_HEADER = "X-PARTNER-TOKEN"


def _api_error(status_code: int, body: str) -> MaigaAPIError:
    """Build the exception for a non-2xx response.

    JSON bodies contribute their ``message`` (or ``error``) field; anything
    that does not decode as JSON is reported verbatim.
    """
    message = f"API request failed with status {status_code}"

    try:
        data = json.loads(body)
    except ValueError:
        return MaigaAPIError(body or message, status_code)

    if isinstance(data, dict):
        message = data.get("message") or data.get("error") or message

    if status_code == 429:
        retry_after = data.get("retry_after_seconds") if isinstance(data, dict) else None
        return MaigaRateLimitError(
            f"Rate limit exceeded. {message}. Retry after {retry_after or 'unknown'} seconds.",
            retry_after=retry_after,
        )

    return MaigaAPIError(str(message), status_code)


class MaigaClient:
    """Stateless client bound to one partner token and base URL."""

    def __init__(
        self,
        settings: MaigaSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Server configuration holding the token and base URL
            transport: Optional httpx transport, used by tests to stub the API
        """
        self.base_url = settings.base_url
        self.timeout = settings.request_timeout
        self.debug = settings.debug
        self._api_token = settings.api_token
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            PARTNER_TOKEN_HEADER: self._api_token,
            "Content-Type": "application/json",
        }

    async def post(self, endpoint: str, body: dict[str, Any]) -> Any:
        """POST a JSON body to ``endpoint`` and return the decoded response.

        Args:
            endpoint: Path under the base URL, e.g. "/partner/analyse"
            body: JSON-serializable request body

        Returns:
            Decoded JSON payload of a 2xx response

        Raises:
            MaigaAPIError: Non-2xx status (MaigaRateLimitError for 429)
            MaigaTransportError: Network failure before a response arrived
            MaigaResponseParseError: 2xx response whose body is not JSON
        """
        url = f"{self.base_url}{endpoint}"

        # Headers are never logged: they carry the partner token
        if self.debug:
            logger.debug(f"Making request to: {url}")
            logger.debug(f"Request body: {json.dumps(body, indent=2)}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(url, headers=self._headers(), json=body)
        except httpx.HTTPError as exc:
            logger.error(f"Request to {url} failed: {exc}")
            raise MaigaTransportError(f"Request to {url} failed: {exc}") from exc

        response_text = response.text

        if self.debug:
            logger.debug(f"Response status: {response.status_code}")
            logger.debug(f"Response body: {response_text}")

        if not response.is_success:
            logger.warning(f"Partner API returned status={response.status_code} for {endpoint}")
            raise _api_error(response.status_code, response_text)

        try:
            return json.loads(response_text)
        except ValueError as exc:
            raise MaigaResponseParseError(
                f"Failed to parse API response: {response_text}", body=response_text
            ) from exc

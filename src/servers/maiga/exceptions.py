"""Custom exception types for Maiga partner API operations.

The HTTP client raises these; the tool layer converts every one of them into
text content so nothing reaches the MCP caller as a protocol error.
"""

from __future__ import annotations


class MaigaError(Exception):
    """Base exception for all Maiga server errors."""

    pass


class MaigaAPIError(MaigaError):
    """Raised when the partner API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MaigaRateLimitError(MaigaAPIError):
    """Raised when the partner API answers 429 Too Many Requests."""

    def __init__(self, message: str, retry_after: object | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class MaigaTransportError(MaigaError):
    """Raised when the request could not be sent or no response arrived."""

    pass


class MaigaResponseParseError(MaigaError):
    """Raised when a successful response body is not valid JSON."""

    def __init__(self, message: str, body: str) -> None:
        super().__init__(message)
        self.body = body


class UnknownToolError(MaigaError):
    """Raised when a tool name has no endpoint mapping."""

    pass


class CredentialStubError(MaigaError):
    """Raised inside the keytar stub installer; always logged and swallowed."""

    pass

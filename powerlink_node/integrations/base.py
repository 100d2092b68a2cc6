"""
Base classes for Powerlink node integrations.

This module defines the HTTP client foundation the node talks through,
along with the error taxonomy every remote failure is mapped onto.

Design Principles:
1. Async-first: All I/O operations are async
2. Single attempt: One request per call, failures propagate to the caller
3. Observable: Request/response logging gated by configuration
4. Testable: The httpx transport can be swapped in tests

Error Mapping:
    - 401/403 -> AuthenticationError
    - 404 -> NotFoundError
    - 400/422 -> ValidationError
    - 429 -> RateLimitError
    - other non-2xx, timeouts, transport errors -> IntegrationError
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class IntegrationError(Exception):
    """Base exception for remote call failures."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        parts = [f"[{self.integration}] {self.args[0]}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class AuthenticationError(IntegrationError):
    """Raised when authentication fails (401/403)."""


class RateLimitError(IntegrationError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, integration, **kwargs)
        self.retry_after = retry_after


class NotFoundError(IntegrationError):
    """Raised when a resource is not found (404)."""


class ValidationError(IntegrationError):
    """Raised when the remote side rejects the request payload (400/422)."""


# Status -> (exception type, message prefix). 429 is handled separately.
_STATUS_ERRORS: dict[int, tuple[type[IntegrationError], str]] = {
    400: (ValidationError, "Validation error"),
    401: (AuthenticationError, "Authentication failed"),
    403: (AuthenticationError, "Authentication failed"),
    404: (NotFoundError, "Resource not found"),
    422: (ValidationError, "Validation error"),
}


def _parse_retry_after(value: str | None) -> float | None:
    # HTTP-date forms are not interpreted
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Configuration for an integration client."""

    api_key: str = ""
    base_url: str = ""

    # Observability
    log_requests: bool = False
    log_responses: bool = False


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides common functionality:
    - HTTP client management
    - Authentication header injection
    - Error mapping
    - Request/response logging

    Subclasses must implement:
    - name: Integration identifier
    - _get_auth_headers(): Return authentication headers

    No timeout is configured here; requests inherit the httpx default.
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    @abstractmethod
    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Execute a single HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: URL path or absolute URL
            params: Query parameters
            json: JSON body
            headers: Additional headers

        Returns:
            httpx.Response

        Raises:
            IntegrationError: On transport failure or non-2xx status
        """
        client = await self._get_client()

        if self.config.log_requests:
            logger.debug(f"[{self.name}] {method} {path} params={params} body={json}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise IntegrationError(f"Request timeout: {e}", self.name) from e
        except httpx.TransportError as e:
            raise IntegrationError(f"Network error: {e}", self.name) from e

        if self.config.log_responses:
            logger.debug(
                f"[{self.name}] Response: status={response.status_code} "
                f"body={response.text[:500] if response.text else 'empty'}"
            )

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            IntegrationError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        body = response.text

        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                self.name,
                status_code=status,
                response_body=body,
                retry_after=_parse_retry_after(response.headers.get("Retry-After")),
            )

        error_type, reason = _STATUS_ERRORS.get(status, (IntegrationError, "Request failed"))
        raise error_type(
            f"{reason}: {body}",
            self.name,
            status_code=status,
            response_body=body,
        )

    def _decode_json(self, response: httpx.Response) -> Any:
        """Decode a JSON response body; an empty body decodes to None."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise IntegrationError(
                f"Malformed response body: {e}",
                self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    async def __aenter__(self) -> "IntegrationClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

"""
Base HTTP client with status checking, decoding and error mapping.

Provides the foundation shared by the Steam, Notion and Discord
clients: a lazily created httpx client, structured logging, and
translation of transport, status and schema failures into the
notifier's error taxonomy. Requests are never retried.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from steam_price_notifier.errors import DecodeError, NetworkError, UnexpectedStatusError
from steam_price_notifier.logger import get_logger

M = TypeVar("M", bound=BaseModel)


class BaseClient(ABC):
    """
    Abstract base class for all API clients.

    Provides common functionality including:
    - HTTP client management
    - Expected-status enforcement
    - JSON decoding against Pydantic contracts
    - Structured logging

    Subclasses must implement:
    - service_name: Identifier for the remote service
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            timeout: HTTP request timeout in seconds
            headers: Extra headers sent with every request
        """
        self._timeout = timeout
        self._headers = {
            "User-Agent": "SteamPriceNotifier/1.0",
            "Accept": "application/json",
            **(headers or {}),
        }
        self._logger = get_logger(
            self.__class__.__name__,
            component="client",
            service=self.service_name,
        )
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Return identifier for this service."""
        ...

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers=self._headers,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _make_request(
        self,
        method: str,
        url: str,
        *,
        expected_status: int = 200,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send a request and check its status.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            expected_status: The only status code treated as success
            **kwargs: Additional arguments passed to httpx

        Returns:
            httpx.Response: Response with the expected status

        Raises:
            NetworkError: If the request could not be completed
            UnexpectedStatusError: If the status differs from expected_status
        """
        endpoint = self._redact(url)
        self._logger.debug("Making request", method=method, url=endpoint)

        try:
            response = await self.client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.error(
                "Request failed",
                method=method,
                url=endpoint,
                error=str(e) or type(e).__name__,
            )
            raise NetworkError(
                f"Failed to send {method} request to {self.service_name}: {e}",
                service=self.service_name,
                endpoint=endpoint,
                original_error=e,
            ) from e

        if response.status_code != expected_status:
            self._logger.error(
                "Unexpected status code",
                method=method,
                url=endpoint,
                status_code=response.status_code,
                expected_status=expected_status,
            )
            raise UnexpectedStatusError(
                f"Unexpected status code from {self.service_name}: "
                f"{response.status_code} (expected {expected_status})",
                service=self.service_name,
                endpoint=endpoint,
                status_code=response.status_code,
            )

        return response

    def _json(self, response: httpx.Response) -> Any:
        """Parse a response body as JSON."""
        try:
            return response.json()
        except ValueError as e:
            self._logger.error("Response is not valid JSON", error=str(e))
            raise DecodeError(
                f"Response from {self.service_name} is not valid JSON",
                service=self.service_name,
                endpoint=self._redact(str(response.request.url)),
                status_code=response.status_code,
                original_error=e,
            ) from e

    def _validate(self, model: type[M], raw_data: Any) -> M:
        """
        Validate decoded JSON against a contract.

        Raises:
            DecodeError: If the data does not match the expected schema
        """
        try:
            return model.model_validate(raw_data)
        except PydanticValidationError as e:
            self._logger.error(
                "Response validation failed",
                model=model.__name__,
                error_count=e.error_count(),
            )
            raise DecodeError(
                f"Response validation failed for {model.__name__}: {e}",
                service=self.service_name,
                original_error=e,
            ) from e

    def _decode(self, response: httpx.Response, model: type[M]) -> M:
        """Parse and validate a response body."""
        return self._validate(model, self._json(response))

    def _redact(self, url: str) -> str:
        """Hook for hiding secrets embedded in URLs before logging."""
        return url

"""Async HTTP transport shared by GS2 service clients.

This module provides the base class every GS2 service client extends. It owns
the httpx connection, attaches the project client ID, maps HTTP error
statuses to typed exceptions and retries transient failures of idempotent
requests. Request signing is not performed here; pass an ``httpx.Auth`` via
``auth`` when the endpoint requires it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from httpx import AsyncClient, Auth, HTTPError, TimeoutException
from pydantic import BaseModel, ValidationError

from gs2_matchmaking.client.exceptions import (
    Gs2ClientError,
    Gs2ConnectionError,
    Gs2APIError,
    error_for_status,
)
from gs2_matchmaking.config import (
    DEFAULT_ENDPOINT_URL_TEMPLATE,
    ClientConfig,
    format_endpoint_url,
)
from gs2_matchmaking.models import Credentials

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

CLIENT_ID_HEADER = "X-GS2-CLIENT-ID"

# POST is left out so that a join or create is never sent twice
_IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


class Gs2HTTPClient:
    """Async HTTP client base for GS2 REST endpoints.

    Subclasses build paths and payloads and call ``do_get``, ``do_post``,
    ``do_put`` or ``do_delete``.

    Example:
        async with Gs2MatchmakingClient("ap-northeast-1", credentials) as client:
            page = await client.describe_matchmaking()
    """

    def __init__(
        self,
        region: str,
        credentials: Credentials,
        *,
        endpoint_url_template: str = DEFAULT_ENDPOINT_URL_TEMPLATE,
        timeout: float = 30.0,
        max_retries: int = 3,
        auth: Auth | None = None,
    ):
        """Initialize the HTTP client.

        Args:
            region: GS2 region name (e.g. "ap-northeast-1").
            credentials: Project client ID and secret.
            endpoint_url_template: Endpoint URL with {service} and {region}
                placeholders.
            timeout: Request timeout in seconds (default: 30.0)
            max_retries: Maximum attempts for idempotent requests (default: 3)
            auth: Optional httpx auth flow applied to every request.
        """
        self.region = region
        self.credentials = credentials
        self.endpoint_url_template = endpoint_url_template
        self.timeout = timeout
        self.max_retries = max_retries
        self.auth = auth
        self._client: AsyncClient | None = None

    @classmethod
    def from_config(cls, config: ClientConfig, *, auth: Auth | None = None):
        """Create a client from a ClientConfig."""
        return cls(
            config.region,
            config.credentials,
            endpoint_url_template=config.endpoint_url_template,
            timeout=config.timeout,
            max_retries=config.max_retries,
            auth=auth,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Initialize the underlying httpx.AsyncClient (idempotent)."""
        if self._client is None:
            self._client = AsyncClient(
                timeout=self.timeout,
                headers={CLIENT_ID_HEADER: self.credentials.client_id},
                auth=self.auth,
            )
            logger.debug("HTTP client connected (region=%s)", self.region)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client closed")

    def endpoint_url(self, endpoint: str) -> str:
        """Return the base URL of `endpoint` in this client's region."""
        return format_endpoint_url(self.endpoint_url_template, endpoint, self.region)

    # =========================================================================
    # Request helpers for subclasses
    # =========================================================================

    async def do_get(
        self,
        service: str,
        action: str,
        endpoint: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Perform a GET request and return the decoded JSON body."""
        return await self._request(
            "GET", service, action, endpoint, path, query=query, headers=headers
        )

    async def do_post(
        self,
        service: str,
        action: str,
        endpoint: str,
        path: str,
        body: Mapping[str, Any],
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Perform a POST request with a JSON body."""
        return await self._request(
            "POST",
            service,
            action,
            endpoint,
            path,
            body=body,
            query=query,
            headers=headers,
        )

    async def do_put(
        self,
        service: str,
        action: str,
        endpoint: str,
        path: str,
        body: Mapping[str, Any],
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Perform a PUT request with a JSON body."""
        return await self._request(
            "PUT",
            service,
            action,
            endpoint,
            path,
            body=body,
            query=query,
            headers=headers,
        )

    async def do_delete(
        self,
        service: str,
        action: str,
        endpoint: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Perform a DELETE request."""
        return await self._request(
            "DELETE", service, action, endpoint, path, query=query, headers=headers
        )

    def parse_response(self, action: str, data: Any, response_model: type[T]) -> T:
        """Validate a decoded response body against `response_model`.

        Raises:
            Gs2ClientError: If the body does not match the model.
        """
        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            raise Gs2ClientError(f"{action}: response validation error: {e}") from e

    # =========================================================================
    # Internal HTTP Methods
    # =========================================================================

    async def _request(
        self,
        method: str,
        service: str,
        action: str,
        endpoint: str,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Execute an HTTP request with error handling and retries.

        Returns:
            The decoded JSON body, or None when the response has no body.

        Raises:
            Gs2APIError: If the endpoint returns an error status (not retried).
            Gs2ConnectionError: If connection fails after all retries.
            Gs2ClientError: For undecodable responses.
        """
        if self._client is None:
            raise Gs2ConnectionError("Client not connected. Call connect() first.")

        url = self.endpoint_url(endpoint) + path
        kwargs: dict[str, Any] = {}
        if query:
            kwargs["params"] = dict(query)
        if headers:
            kwargs["headers"] = dict(headers)
        if body is not None:
            kwargs["json"] = dict(body)

        attempts = self.max_retries if method in _IDEMPOTENT_METHODS else 1
        last_error: Exception | None = None

        for attempt in range(attempts):
            try:
                logger.debug(
                    "Request %s %s.%s %s (attempt %d/%d)",
                    method,
                    service,
                    action,
                    url,
                    attempt + 1,
                    attempts,
                )

                response = await self._client.request(method, url, **kwargs)

                if response.status_code >= 400:
                    error_text = response.text
                    logger.warning(
                        "%s.%s failed with %d: %s",
                        service,
                        action,
                        response.status_code,
                        error_text,
                    )
                    raise error_for_status(
                        response.status_code,
                        f"{service}.{action}: {error_text}",
                    )

                if response.status_code == 204 or not response.content:
                    return None
                return response.json()

            except TimeoutException as e:
                last_error = Gs2ConnectionError(f"Request timeout: {e}")
                logger.warning("Request timeout on attempt %d: %s", attempt + 1, e)

            except HTTPError as e:
                last_error = Gs2ConnectionError(f"HTTP error: {e}")
                logger.warning("HTTP error on attempt %d: %s", attempt + 1, e)

            except Gs2APIError:
                # Intentional server responses
                raise

            except ValueError as e:
                raise Gs2ClientError(f"{service}.{action}: invalid JSON: {e}") from e

            if attempt < attempts - 1:
                backoff = 2**attempt * 0.1
                logger.debug("Retrying in %.1f seconds...", backoff)
                await asyncio.sleep(backoff)

        raise last_error or Gs2ConnectionError("Request failed after retries")

# 📄 File: app/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# A careful messenger for talking to outside services like the payment company: it waits a
# sensible time for answers, tries again when the line drops, and reports clearly when it fails.

# 🧪 Purpose (Technical Summary):
# Generic async JSON HTTP client on aiohttp with HTTP basic auth, tenacity retry with
# exponential backoff for transport errors and 5xx responses, request statistics and
# mapping of failures to ExternalServiceError.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry logic and backoff strategies

# 🔄 Connected Modules / Calls From:
# Used by: app.modules.payments.infrastructure.external.gateway_client

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import BasicAuth, ClientSession, ClientTimeout
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})
IDEMPOTENCY_HEADER = "X-Idempotency-Key"


class RetryableServiceError(Exception):
    """Raised for upstream responses worth retrying (5xx, 429)."""

    def __init__(self, status: int, body: Any):
        self.status = status
        self.body = body
        super().__init__(f"Upstream returned {status}")


def _is_rate_limited(error: BaseException) -> bool:
    return isinstance(error, RetryableServiceError) and error.status == 429


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Automatic retry with exponential backoff
    - Basic authentication
    - Request/response logging
    - Request statistics
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/')
        self.api_name = api_name
        self.auth = BasicAuth(username, password or "") if username else None
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

        self.session: Optional[ClientSession] = None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'last_response_time': None,
        }

    async def initialize(self) -> None:
        """Initialize the client session."""
        if self.session and not self.session.closed:
            return

        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers=self._get_default_headers(),
            auth=self.auth,
        )
        logger.info(f"API client initialized for {self.api_name}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        return {
            'User-Agent': f'FoodDeliveryApp/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }

    def _retry_condition(self, method: str, idempotency_key: Optional[str]):
        """
        Retry policy for one request.

        Idempotent methods and keyed requests retry on transport errors and
        5xx/429 responses. Unkeyed writes retry only when no connection was made
        or the service answered 429.
        """
        if method.upper() in IDEMPOTENT_METHODS or idempotency_key:
            return retry_if_exception_type(
                (aiohttp.ClientConnectionError, asyncio.TimeoutError, RetryableServiceError)
            )
        return retry_if_exception_type(aiohttp.ClientConnectorError) | retry_if_exception(_is_rate_limited)

    async def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL
            json: JSON request body
            params: Query string parameters
            idempotency_key: Sent as ``X-Idempotency-Key`` so the service can
                deduplicate retried writes

        Returns:
            Dict[str, Any]: Decoded JSON response

        Raises:
            ExternalServiceError: When the service fails or keeps failing after retries
        """
        headers = {IDEMPOTENCY_HEADER: idempotency_key} if idempotency_key else None
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
                retry=self._retry_condition(method, idempotency_key),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    return await self._send(method, endpoint, json=json, params=params, headers=headers)
        except RetryableServiceError as e:
            self.stats['failed_requests'] += 1
            raise ExternalServiceError(
                f"{self.api_name} is unavailable",
                service_name=self.api_name,
                service_status_code=e.status,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.stats['failed_requests'] += 1
            logger.error(f"{self.api_name} request failed: {e}")
            raise ExternalServiceError(
                f"{self.api_name} request failed",
                service_name=self.api_name,
                details={"reason": str(e)},
            )

    async def _send(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        await self.initialize()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        start_time = time.time()

        async with self.session.request(method, url, json=json, params=params, headers=headers) as response:
            self.stats['total_requests'] += 1
            self.stats['last_response_time'] = time.time() - start_time

            try:
                body = await response.json(content_type=None)
            except ValueError:
                body = {'raw_response': await response.text()}

            if response.status >= 500 or response.status == 429:
                logger.warning(f"{self.api_name} {method} {endpoint} returned {response.status}")
                raise RetryableServiceError(response.status, body)

            if response.status >= 400:
                self.stats['failed_requests'] += 1
                logger.error(f"{self.api_name} {method} {endpoint} rejected: {response.status} {body}")
                raise ExternalServiceError(
                    f"{self.api_name} rejected the request",
                    service_name=self.api_name,
                    service_status_code=response.status,
                    details={"response": body},
                )

            self.stats['successful_requests'] += 1
            logger.info(
                f"{self.api_name} API request successful: {method} {endpoint} "
                f"({self.stats['last_response_time']:.2f}s)"
            )
            return body or {}

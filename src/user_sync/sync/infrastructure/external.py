"""
Sync External Service Integrations
==================================

HTTP delivery of the user batch to the third-party API.
"""

import asyncio
from typing import Dict, Optional, Sequence

import httpx
from pydantic_core import PydanticSerializationError

from user_sync.config import API_TIMEOUT_SECONDS, ApiConfig
from user_sync.core import ApiDeliveryException, ApiException, ApiTimeoutException
from user_sync.shared.infrastructure.logging import get_logger
from user_sync.sync.application import CanonicalUser, IUserPublisher, UserSyncPayload

logger = get_logger(__name__)


class ApiPublisher(IUserPublisher):
    """
    Posts the user batch to the configured endpoint.

    Handles:
    - Optional bearer authentication
    - A hard deadline from request start to the final response headers
    - Redirect following (307/308 re-POST the body)
    - Status interpretation of the final response (2xx is success)

    A single attempt is made; there is no retry.
    """

    def __init__(
        self,
        config: ApiConfig,
        timeout_seconds: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._config = config
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def build_headers(self) -> Dict[str, str]:
        """Build request headers; Authorization only when an API key is set."""
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    @staticmethod
    def build_body(users: Sequence[CanonicalUser]) -> str:
        """
        Serialize the batch as {"users": [...]}.

        Raises:
            ApiDeliveryException: If a value has no JSON representation
        """
        try:
            return UserSyncPayload(users=list(users)).to_json()
        except PydanticSerializationError as e:
            raise ApiDeliveryException(f"Could not serialize user batch: {e}") from e

    async def send(self, users: Sequence[CanonicalUser]) -> None:
        """
        Deliver the batch in one POST.

        Redirects are followed. The exchange settles once the final response
        headers arrive; the response body is never read.

        Raises:
            ApiTimeoutException: If the exchange exceeds the deadline
            ApiDeliveryException: If the batch cannot be serialized or no response was received
            ApiException: If the final response status is not 2xx
        """
        headers = self.build_headers()
        body = self.build_body(users)

        async with httpx.AsyncClient(
            timeout=self._timeout_seconds,
            transport=self._transport,
            follow_redirects=True
        ) as client:
            try:
                # The deadline is cancelled on exit whatever the outcome
                async with asyncio.timeout(self._timeout_seconds):
                    request = client.build_request(
                        "POST",
                        self._config.url,
                        content=body,
                        headers=headers
                    )
                    response = await client.send(request, stream=True)
                    await response.aclose()
            except (TimeoutError, httpx.TimeoutException) as e:
                raise ApiTimeoutException(self._timeout_seconds) from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise ApiDeliveryException(
                    f"API request failed: {e}",
                    {"url": self._config.url}
                ) from e

        if not response.is_success:
            raise ApiException(response.status_code, response.reason_phrase)

        logger.info(
            "User batch delivered",
            extra={"status_code": response.status_code, "records": len(users)}
        )

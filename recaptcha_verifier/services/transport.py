"""HTTP transport for siteverify requests.

The clients only need ``post(url, params)``; ``HttpxTransport`` provides it
on top of ``httpx.AsyncClient``. Timeouts and connection pooling live here,
never in the decision logic.
"""

import logging
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, ConfigDict

from recaptcha_verifier.errors import RecaptchaIOError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class TransportResponse(BaseModel):
    """Raw reply from the verification server."""
    model_config = ConfigDict(frozen=True)

    status_code: int
    body: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299


class Transport(Protocol):
    async def post(self, url: str, params: dict[str, str]) -> TransportResponse: ...

    async def aclose(self) -> None: ...


class HttpxTransport:
    """Async transport backed by httpx.

    Pass ``client`` to reuse a configured ``httpx.AsyncClient`` (custom
    limits, proxies, a mock transport in tests). The transport owns it from
    then on and closes it in ``aclose()``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def post(self, url: str, params: dict[str, str]) -> TransportResponse:
        try:
            response = await self._client.post(url, data=params)
        except httpx.HTTPError as e:
            logger.warning(f"siteverify request to {url} failed: {e!r}")
            raise RecaptchaIOError(e) from e
        return TransportResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        await self._client.aclose()

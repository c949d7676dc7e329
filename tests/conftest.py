from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest

from recaptcha_verifier.services.transport import HttpxTransport


class RecordingServer:
    """Fake siteverify endpoint that records every request it receives."""

    def __init__(self, body: object = None, status_code: int = 200, raw: bytes | None = None) -> None:
        self.body = body
        self.status_code = status_code
        self.raw = raw
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = self.raw if self.raw is not None else json.dumps(self.body).encode()
        return httpx.Response(self.status_code, content=content)

    def transport(self) -> HttpxTransport:
        return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(self.handler)))

    @property
    def calls(self) -> int:
        return len(self.requests)

    def form(self, index: int = -1) -> dict[str, str]:
        parsed = parse_qs(self.requests[index].content.decode())
        return {k: v[0] for k, v in parsed.items()}


@pytest.fixture
def server():
    def _make(body: object = None, status_code: int = 200, raw: bytes | None = None) -> RecordingServer:
        return RecordingServer(body, status_code, raw)

    return _make

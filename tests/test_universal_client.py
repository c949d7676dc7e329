from __future__ import annotations

import pytest

from recaptcha_verifier.config import V3Config
from recaptcha_verifier.errors import InvalidSiteKeyError, UnexpectedJsonStructure
from recaptcha_verifier.models import (
    ErrorCode,
    UniversalDecision,
    UniversalResponseDetail,
    UniversalVerification,
)
from recaptcha_verifier.services.client import UniversalRecaptchaClient


async def _run(fake, config: V3Config | None = None):
    async with UniversalRecaptchaClient("secret", config, transport=fake.transport()) as client:
        return await client.verify("token"), await client.get_detailed_response("token")


@pytest.mark.asyncio
async def test_v2_reply(server) -> None:
    verified, detail = await _run(server({"success": True, "hostname": "wusatosi.com"}))
    assert verified
    assert detail == UniversalVerification(
        detail=UniversalResponseDetail(success=True, hostname="wusatosi.com"),
        decision=UniversalDecision(decision=True, host_match=True),
    )


@pytest.mark.asyncio
async def test_v2_reply_host_mismatch(server) -> None:
    config = V3Config(allowed_hosts=frozenset({"google.com"}))
    verified, detail = await _run(server({"success": True, "hostname": "wusatosi.com"}), config)
    assert not verified
    assert detail.decision == UniversalDecision(decision=False, host_match=False)


@pytest.mark.asyncio
async def test_v3_reply(server) -> None:
    body = {"success": True, "action": "click", "score": 0.9, "hostname": "x"}
    verified, detail = await _run(server(body))
    assert verified
    assert detail == UniversalVerification(
        detail=UniversalResponseDetail(success=True, hostname="x", score=0.9, action="click"),
        decision=UniversalDecision(decision=True, host_match=True, suggested_threshold=0.5),
    )


@pytest.mark.asyncio
async def test_v3_reply_below_threshold(server) -> None:
    body = {"success": True, "action": "click", "score": 0.4, "hostname": "x"}
    verified, detail = await _run(server(body), V3Config(score_threshold=0.4))
    assert not verified
    assert detail.decision.suggested_threshold == 0.4


@pytest.mark.asyncio
async def test_server_failure(server) -> None:
    verified, detail = await _run(server({"success": False, "hostname": "wusatosi.com"}))
    assert not verified
    assert not detail.decision.decision


@pytest.mark.asyncio
async def test_error_code(server) -> None:
    verified, detail = await _run(server({"success": False, "error-codes": ["timeout-or-duplicate"]}))
    assert not verified
    assert detail is ErrorCode.TIMEOUT_OR_DUPLICATE


@pytest.mark.asyncio
async def test_invalid_site_secret(server) -> None:
    with pytest.raises(InvalidSiteKeyError):
        await _run(server({"success": False, "score": 0.9, "error-codes": ["invalid-input-secret"]}))


@pytest.mark.asyncio
async def test_malformed_score(server) -> None:
    with pytest.raises(UnexpectedJsonStructure):
        await _run(server({"success": True, "hostname": "x", "score": None}))

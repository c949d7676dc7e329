"""Verification data models."""

from recaptcha_verifier.models.error_code import ErrorCode
from recaptcha_verifier.models.verification import (
    InterpretedResponse,
    UniversalDecision,
    UniversalResponseDetail,
    UniversalVerification,
    V2Decision,
    V2ResponseDetail,
    V2Verification,
    V3Decision,
    V3ResponseDetail,
    V3Verification,
)

__all__ = [
    "ErrorCode",
    "InterpretedResponse",
    "UniversalDecision",
    "UniversalResponseDetail",
    "UniversalVerification",
    "V2Decision",
    "V2ResponseDetail",
    "V2Verification",
    "V3Decision",
    "V3ResponseDetail",
    "V3Verification",
]

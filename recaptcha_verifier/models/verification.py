"""Interpreted verification responses and client decisions.

All of these are created once per verification call and never mutated.
A verification either produces an ``ErrorCode`` or one of the models below,
so callers branch with ``match``/``isinstance``::

    match await client.get_detailed_response(token):
        case ErrorCode() as code:
            ...
        case V3Verification(decision=decision):
            ...
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class InterpretedResponse(_Frozen):
    """Fields shared by every successful interpretation of a server reply."""
    success: bool
    host_match: bool
    host: str


# --- v2 ---

class V2ResponseDetail(_Frozen):
    """What the verification server said about a v2 token."""
    success: bool
    domain: str  # hostname, or package name for Android callers


class V2Decision(_Frozen):
    """The client's decision on top of the server reply."""
    decision: bool
    host_match: bool


class V2Verification(_Frozen):
    detail: V2ResponseDetail
    decision: V2Decision


# --- v3 ---

class V3ResponseDetail(_Frozen):
    """What the verification server said about a v3 token."""
    success: bool
    hostname: str
    score: float
    action: str


class V3Decision(_Frozen):
    """The client's decision, with the threshold the score was tested against."""
    decision: bool
    host_match: bool
    suggested_threshold: float


class V3Verification(_Frozen):
    detail: V3ResponseDetail
    decision: V3Decision


# --- universal ---

class UniversalResponseDetail(_Frozen):
    """Server reply for a token of either widget version.

    ``score`` and ``action`` are only set for v3 tokens.
    """
    success: bool
    hostname: str
    score: Optional[float] = None
    action: Optional[str] = None


class UniversalDecision(_Frozen):
    decision: bool
    host_match: bool
    suggested_threshold: Optional[float] = None  # None when no score was evaluated


class UniversalVerification(_Frozen):
    detail: UniversalResponseDetail
    decision: UniversalDecision

"""Decision policies for v2, v3 and universal verification.

Each policy is a pure function of the interpreted reply, the raw body and
the client configuration.
"""

from recaptcha_verifier.config import UNREACHABLE_THRESHOLD, V3Config
from recaptcha_verifier.models import (
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
from recaptcha_verifier.services.interpreter import (
    ACTION_ATTRIBUTE,
    SCORE_ATTRIBUTE,
    expect_string,
    extract_action,
    extract_score,
)

# Returned when the server reports failure, no score was evaluated
V3_FAIL_DECISION = V3Decision(
    decision=False,
    host_match=False,
    suggested_threshold=UNREACHABLE_THRESHOLD,
)


def decide_v2(interpreted: InterpretedResponse) -> V2Verification:
    return V2Verification(
        detail=V2ResponseDetail(success=interpreted.success, domain=interpreted.host),
        decision=V2Decision(
            decision=interpreted.success and interpreted.host_match,
            host_match=interpreted.host_match,
        ),
    )


def decide_v3(interpreted: InterpretedResponse, body: dict, config: V3Config) -> V3Verification:
    """Compare the reported score with the threshold for the reported action.

    The comparison is strict: a score equal to the threshold fails.
    """
    if not interpreted.success:
        return V3Verification(
            detail=V3ResponseDetail(success=False, hostname=interpreted.host, score=0.0, action=""),
            decision=V3_FAIL_DECISION,
        )

    score = extract_score(body)
    action = extract_action(body)
    threshold = config.threshold_for(action)

    return V3Verification(
        detail=V3ResponseDetail(success=True, hostname=interpreted.host, score=score, action=action),
        decision=V3Decision(
            decision=interpreted.host_match and score > threshold,
            host_match=interpreted.host_match,
            suggested_threshold=threshold,
        ),
    )


def decide_universal(
    interpreted: InterpretedResponse, body: dict, config: V3Config
) -> UniversalVerification:
    """Apply the v3 rule when the reply carries a score, the v2 rule otherwise."""
    if SCORE_ATTRIBUTE not in body:
        return UniversalVerification(
            detail=UniversalResponseDetail(success=interpreted.success, hostname=interpreted.host),
            decision=UniversalDecision(
                decision=interpreted.success and interpreted.host_match,
                host_match=interpreted.host_match,
            ),
        )

    score = extract_score(body)
    action = None
    if ACTION_ATTRIBUTE in body:
        action = expect_string(body, ACTION_ATTRIBUTE)
    threshold = config.threshold_for(action) if action is not None else config.score_threshold

    return UniversalVerification(
        detail=UniversalResponseDetail(
            success=interpreted.success,
            hostname=interpreted.host,
            score=score,
            action=action,
        ),
        decision=UniversalDecision(
            decision=interpreted.success and interpreted.host_match and score > threshold,
            host_match=interpreted.host_match,
            suggested_threshold=threshold,
        ),
    )

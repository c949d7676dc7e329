"""FastAPI integration - reCAPTCHA verification as a route dependency."""

import logging
from typing import Optional, Union

from fastapi import HTTPException, Request, status

from recaptcha_verifier.errors import RecaptchaTransportError
from recaptcha_verifier.models import (
    ErrorCode,
    UniversalVerification,
    V2Verification,
    V3Verification,
)
from recaptcha_verifier.services.client import RecaptchaClientBase

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_HEADER = "X-Recaptcha-Token"
TOKEN_QUERY_PARAM = "recaptcha_token"

Verification = Union[V2Verification, V3Verification, UniversalVerification]


def require_recaptcha(
    client: RecaptchaClientBase,
    header: str = DEFAULT_TOKEN_HEADER,
    enabled: bool = True,
):
    """Create a dependency that rejects requests without a passing token.

    The token is read from ``header``, falling back to the
    ``recaptcha_token`` query parameter. The dependency returns the detailed
    verification, or None when verification is disabled.

    Invalid site secrets and malformed server replies are not turned into
    HTTP errors, they propagate so the misconfiguration surfaces as a 500.
    """
    async def recaptcha_checker(request: Request) -> Optional[Verification]:
        if not enabled:
            return None

        token = request.headers.get(header) or request.query_params.get(TOKEN_QUERY_PARAM)
        if not token:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing reCAPTCHA token",
            )

        remote_ip = request.client.host if request.client else ""
        try:
            result = await client.get_detailed_response(token, remote_ip)
        except RecaptchaTransportError as e:
            logger.warning(f"reCAPTCHA verification unavailable: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="reCAPTCHA verification unavailable",
            ) from e

        match result:
            case ErrorCode() as error_code:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"reCAPTCHA verification failed: {error_code.value}",
                )
            case verification if not verification.decision.decision:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="reCAPTCHA verification failed",
                )
        return result

    return recaptcha_checker

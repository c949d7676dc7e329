"""Verification services."""

from recaptcha_verifier.services.client import (
    RecaptchaClientBase,
    RecaptchaV2Client,
    RecaptchaV3Client,
    UniversalRecaptchaClient,
    create_client_from_settings,
)
from recaptcha_verifier.services.transport import HttpxTransport, Transport, TransportResponse
from recaptcha_verifier.services.validator import is_likely_valid

__all__ = [
    "HttpxTransport",
    "RecaptchaClientBase",
    "RecaptchaV2Client",
    "RecaptchaV3Client",
    "Transport",
    "TransportResponse",
    "UniversalRecaptchaClient",
    "create_client_from_settings",
    "is_likely_valid",
]

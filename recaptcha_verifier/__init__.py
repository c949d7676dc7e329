"""Async reCAPTCHA v2/v3 token verification."""

from recaptcha_verifier.config import Settings, V3Config, VerificationConfig, get_settings
from recaptcha_verifier.errors import (
    BadStatusError,
    ClientClosedError,
    InvalidSiteKeyError,
    RecaptchaError,
    RecaptchaIOError,
    RecaptchaTransportError,
    UnableToDeserializeError,
    UnexpectedErrorCode,
    UnexpectedJsonStructure,
)
from recaptcha_verifier.models import (
    ErrorCode,
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
from recaptcha_verifier.services import (
    HttpxTransport,
    RecaptchaV2Client,
    RecaptchaV3Client,
    UniversalRecaptchaClient,
    create_client_from_settings,
    is_likely_valid,
)

__version__ = "0.1.0"

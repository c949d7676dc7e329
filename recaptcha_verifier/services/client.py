"""reCAPTCHA verification clients.

Three flavours share one request/interpretation pipeline:

- ``RecaptchaV2Client``: checkbox / invisible widget, boolean result.
- ``RecaptchaV3Client``: score based, compared against a per-action threshold.
- ``UniversalRecaptchaClient``: picks the v2 or v3 rule from the reply shape.

Clients hold no per-call state, so one instance can serve concurrent
verifications. Close them with ``aclose()`` or ``async with``.
"""

import logging
from typing import Generic, Optional, TypeVar, Union

from recaptcha_verifier.config import Settings, V3Config, VerificationConfig, get_settings
from recaptcha_verifier.errors import BadStatusError, ClientClosedError, InvalidSiteKeyError
from recaptcha_verifier.models import (
    ErrorCode,
    InterpretedResponse,
    UniversalVerification,
    V2Verification,
    V3Verification,
)
from recaptcha_verifier.services.interpreter import interpret_response_body, parse_body
from recaptcha_verifier.services.policy import decide_universal, decide_v2, decide_v3
from recaptcha_verifier.services.transport import HttpxTransport, Transport
from recaptcha_verifier.services.validator import is_likely_valid

logger = logging.getLogger(__name__)

VERIFY_PATH = "/recaptcha/api/siteverify"
DEFAULT_DOMAIN = "https://www.google.com"
ALTERNATE_DOMAIN = "https://www.recaptcha.net"  # For regions where google.com is unreachable

ConfigT = TypeVar("ConfigT", bound=VerificationConfig)
ResultT = TypeVar("ResultT", V2Verification, V3Verification, UniversalVerification)


def verify_url(use_alternate_domain: bool) -> str:
    domain = ALTERNATE_DOMAIN if use_alternate_domain else DEFAULT_DOMAIN
    return f"{domain}{VERIFY_PATH}"


class RecaptchaClientBase(Generic[ConfigT, ResultT]):
    """Request, parse and interpret; subclasses supply the decision policy."""

    def __init__(
        self,
        secret_key: str,
        config: ConfigT,
        transport: Optional[Transport] = None,
    ):
        if not is_likely_valid(secret_key):
            raise InvalidSiteKeyError("site secret failed the pre-check")

        self._secret_key = secret_key
        self.config = config
        self._transport = transport or HttpxTransport()
        self._url = verify_url(config.use_alternate_domain)
        self._closed = False

    async def transact(self, token: str, remote_ip: str = "") -> dict:
        """POST the token to siteverify and return the parsed reply object."""
        self._ensure_open()

        params = {"secret": self._secret_key, "response": token}
        if remote_ip:
            params["remoteip"] = remote_ip

        response = await self._transport.post(self._url, params)
        if not response.is_success:
            body = response.body.decode("utf-8", errors="replace")
            logger.warning(f"siteverify returned status {response.status_code}: {body[:200]}")
            raise BadStatusError(response.status_code, body)

        return parse_body(response.body)

    async def get_detailed_response(
        self, token: str, remote_ip: str = ""
    ) -> Union[ErrorCode, ResultT]:
        """Verify ``token`` and return the error code or the full verification.

        Raises RecaptchaError on transport failures, malformed replies and
        rejected secrets.
        """
        self._ensure_open()

        if not is_likely_valid(token):
            logger.debug("Token failed the pre-check, skipping siteverify request")
            return ErrorCode.INVALID_TOKEN

        body = await self.transact(token, remote_ip)
        interpreted = interpret_response_body(body, self.config)
        if isinstance(interpreted, ErrorCode):
            logger.debug(f"Token rejected by siteverify: {interpreted.value}")
            return interpreted
        return self._decide(interpreted, body)

    async def verify(self, token: str, remote_ip: str = "") -> bool:
        """Return True if the token passes verification."""
        match await self.get_detailed_response(token, remote_ip):
            case ErrorCode():
                return False
            case result:
                return result.decision.decision

    def _decide(self, interpreted: InterpretedResponse, body: dict) -> ResultT:
        raise NotImplementedError

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError()

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        """Release the transport. Further calls raise ClientClosedError."""
        if self._closed:
            return
        self._closed = True
        await self._transport.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class RecaptchaV2Client(RecaptchaClientBase[VerificationConfig, V2Verification]):
    """Verifies v2 tokens: success and an allowed hostname."""

    def __init__(
        self,
        secret_key: str,
        config: Optional[VerificationConfig] = None,
        transport: Optional[Transport] = None,
    ):
        super().__init__(secret_key, config or VerificationConfig(), transport)

    def _decide(self, interpreted: InterpretedResponse, body: dict) -> V2Verification:
        return decide_v2(interpreted)


class RecaptchaV3Client(RecaptchaClientBase[V3Config, V3Verification]):
    """Verifies v3 tokens against the configured per-action score threshold."""

    def __init__(
        self,
        secret_key: str,
        config: Optional[V3Config] = None,
        transport: Optional[Transport] = None,
    ):
        super().__init__(secret_key, config or V3Config(), transport)

    def _decide(self, interpreted: InterpretedResponse, body: dict) -> V3Verification:
        return decide_v3(interpreted, body, self.config)


class UniversalRecaptchaClient(RecaptchaClientBase[V3Config, UniversalVerification]):
    """Verifies tokens of either widget version, chosen by the reply shape."""

    def __init__(
        self,
        secret_key: str,
        config: Optional[V3Config] = None,
        transport: Optional[Transport] = None,
    ):
        super().__init__(secret_key, config or V3Config(), transport)

    def _decide(self, interpreted: InterpretedResponse, body: dict) -> UniversalVerification:
        return decide_universal(interpreted, body, self.config)


CLIENT_VERSIONS = {
    "v2": RecaptchaV2Client,
    "v3": RecaptchaV3Client,
    "universal": UniversalRecaptchaClient,
}


def create_client_from_settings(
    settings: Optional[Settings] = None,
    version: str = "universal",
    transport: Optional[Transport] = None,
) -> RecaptchaClientBase:
    """Build a client from environment settings.

    Raises InvalidSiteKeyError if RECAPTCHA_SECRET_KEY is unset or malformed.
    """
    settings = settings or get_settings()
    try:
        client_cls = CLIENT_VERSIONS[version]
    except KeyError:
        raise ValueError(f"Unknown reCAPTCHA client version: {version!r}") from None
    if not is_likely_valid(settings.secret_key):
        raise InvalidSiteKeyError("RECAPTCHA_SECRET_KEY is missing or malformed")

    config = settings.verification_config() if version == "v2" else settings.v3_config()
    transport = transport or HttpxTransport(timeout=settings.timeout_seconds)
    logger.info(
        f"Creating {version} reCAPTCHA client "
        f"(alternate domain: {config.use_alternate_domain}, allowed hosts: {sorted(config.allowed_hosts)})"
    )
    return client_cls(settings.secret_key, config, transport)

"""Exceptions raised by the reCAPTCHA verifier.

Expected per-request failures (an invalid or reused token) are not
exceptions, they come back as an ``ErrorCode`` value. Everything here is
either a deployment problem or a broken exchange with the verification
server.
"""

from typing import Optional

ISSUE_HINT = "check that the latest version is installed, the verification API may have changed"


class RecaptchaError(Exception):
    """Base class for all verifier errors."""


class InvalidSiteKeyError(RecaptchaError):
    """The site secret was rejected, locally or by the verification server."""

    def __init__(self, message: str = "site secret is invalid"):
        super().__init__(message)


class UnexpectedJsonStructure(RecaptchaError):
    """The server answered 2xx but the payload does not match the schema."""

    def __init__(self, message: str, field: Optional[str] = None, value: object = None):
        super().__init__(f"{message}, {ISSUE_HINT}")
        self.field = field
        self.value = value


class UnableToDeserializeError(UnexpectedJsonStructure):
    """The server did not respond with valid JSON."""

    def __init__(self, cause: Exception):
        super().__init__("the server did not respond with a valid JSON object")
        self.__cause__ = cause


class UnexpectedErrorCode(UnexpectedJsonStructure):
    """None of the reported error codes is part of the known vocabulary."""

    def __init__(self, codes: list[str]):
        super().__init__(f"unexpected error code(s): {', '.join(codes)}", "error-codes", codes)
        self.codes = codes


class RecaptchaTransportError(RecaptchaError):
    """No usable HTTP response was obtained from the verification server."""


class RecaptchaIOError(RecaptchaTransportError):
    """Network failure while talking to the verification server."""

    def __init__(self, cause: Exception):
        super().__init__(f"I/O failure while requesting verification: {cause}")
        self.__cause__ = cause


class BadStatusError(RecaptchaTransportError):
    """The verification server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"invalid response status code: {status_code}, body: {body or 'unavailable'}")
        self.status_code = status_code
        self.body = body


class ClientClosedError(RecaptchaError):
    """The client was used after ``aclose()``."""

    def __init__(self):
        super().__init__("client has been closed")

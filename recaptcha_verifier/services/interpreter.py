"""Parsing and interpretation of siteverify replies.

Turns the raw reply body into either an ``ErrorCode`` (expected per-token
failure) or an ``InterpretedResponse``. Schema violations raise
``UnexpectedJsonStructure``, a rejected secret raises ``InvalidSiteKeyError``.
"""

import json
import logging
from typing import Any, Union

from recaptcha_verifier.config import VerificationConfig
from recaptcha_verifier.errors import (
    InvalidSiteKeyError,
    UnableToDeserializeError,
    UnexpectedErrorCode,
    UnexpectedJsonStructure,
)
from recaptcha_verifier.models import ErrorCode, InterpretedResponse

logger = logging.getLogger(__name__)

SUCCESS_ATTRIBUTE = "success"
ERROR_CODES_ATTRIBUTE = "error-codes"
HOSTNAME_ATTRIBUTE = "hostname"
APK_PACKAGE_ATTRIBUTE = "apk_package_name"
SCORE_ATTRIBUTE = "score"
ACTION_ATTRIBUTE = "action"

INVALID_SECRET_CODE = "invalid-input-secret"

_MISSING = object()


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON, and an infinite score would pass any threshold
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_body(raw: bytes) -> dict:
    """Decode a reply body into a JSON object."""
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        logger.warning(f"siteverify reply is not valid JSON: {raw[:200]!r}")
        raise UnableToDeserializeError(e) from e

    if not isinstance(value, dict):
        logger.warning(f"siteverify reply is not a JSON object: {type(value).__name__}")
        raise UnexpectedJsonStructure("response json isn't an object", None, value)
    return value


# --- Field helpers ---

def _unexpected(name: str, value: Any, problem: str) -> UnexpectedJsonStructure:
    logger.warning(f"Unexpected siteverify field {name!r}: {problem} (raw value: {value!r})")
    return UnexpectedJsonStructure(f"{name} attribute {problem}", name, value)


def _require(body: dict, name: str) -> Any:
    value = body.get(name, _MISSING)
    if value is _MISSING or value is None:
        raise _unexpected(name, None, "does not exist")
    return value


def expect_bool(body: dict, name: str) -> bool:
    value = _require(body, name)
    if not isinstance(value, bool):
        raise _unexpected(name, value, "is not a boolean")
    return value


def expect_string(body: dict, name: str) -> str:
    value = _require(body, name)
    if not isinstance(value, str):
        raise _unexpected(name, value, "is not a string")
    return value


def expect_number(body: dict, name: str) -> float:
    value = _require(body, name)
    # bool is an int subclass, but true/false is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _unexpected(name, value, "is not a number")
    return float(value)


def expect_string_list(body: dict, name: str) -> list[str]:
    """Read an optional array of strings, missing means empty."""
    value = body.get(name, _MISSING)
    if value is _MISSING:
        return []
    if not isinstance(value, list):
        raise _unexpected(name, value, "is not an array")
    for item in value:
        if not isinstance(item, str):
            raise _unexpected(name, value, "contains a non-string element")
    return list(value)


def _extract_host(body: dict) -> str:
    # Android callers report a package name instead of a hostname
    name = HOSTNAME_ATTRIBUTE if HOSTNAME_ATTRIBUTE in body else APK_PACKAGE_ATTRIBUTE
    if name not in body:
        raise _unexpected(HOSTNAME_ATTRIBUTE, None, f"does not exist (nor does {APK_PACKAGE_ATTRIBUTE})")
    host = expect_string(body, name)
    if not host:
        raise _unexpected(name, host, "is empty")
    return host


# --- Interpretation ---

def interpret_error_codes(codes: list[str]) -> ErrorCode | None:
    """Classify the server's error codes.

    Raises InvalidSiteKeyError whenever the secret was rejected, whatever
    else is reported alongside it.
    """
    if INVALID_SECRET_CODE in codes:
        logger.error("Verification server rejected the site secret")
        raise InvalidSiteKeyError()
    if not codes:
        return None

    error_code = ErrorCode.from_server_codes(codes)
    if error_code is None:
        logger.warning(f"Unrecognised siteverify error codes: {codes}")
        raise UnexpectedErrorCode(codes)
    return error_code


def interpret_response_body(
    body: dict, config: VerificationConfig
) -> Union[ErrorCode, InterpretedResponse]:
    """Interpret a parsed siteverify reply against the client configuration."""
    success = expect_bool(body, SUCCESS_ATTRIBUTE)
    codes = expect_string_list(body, ERROR_CODES_ATTRIBUTE)

    error_code = interpret_error_codes(codes)
    if error_code is not None:
        return error_code

    host = _extract_host(body)
    return InterpretedResponse(
        success=success,
        host_match=config.host_allowed(host),
        host=host,
    )


def extract_score(body: dict) -> float:
    return expect_number(body, SCORE_ATTRIBUTE)


def extract_action(body: dict) -> str:
    return expect_string(body, ACTION_ATTRIBUTE)

"""Per-request verification error codes."""

import enum


class ErrorCode(str, enum.Enum):
    """Recoverable reasons a token failed verification.

    ``invalid-input-secret`` is deliberately absent: a rejected secret is a
    deployment problem and raises ``InvalidSiteKeyError`` instead.
    """
    INVALID_TOKEN = "invalid-input-response"          # Malformed, expired or forged token
    TIMEOUT_OR_DUPLICATE = "timeout-or-duplicate"     # Token too old or already verified

    @classmethod
    def from_server_codes(cls, codes: list[str]) -> "ErrorCode | None":
        """Map the first recognised server code, or None if none is known."""
        for code in codes:
            try:
                return cls(code)
            except ValueError:
                continue
        return None

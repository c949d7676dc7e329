"""FastAPI integration."""

from recaptcha_verifier.middleware.recaptcha import require_recaptcha

__all__ = ["require_recaptcha"]

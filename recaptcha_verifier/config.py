"""Verifier configuration.

``Settings`` reads deployment settings from the environment. Clients never
read it implicitly, they are built from the immutable ``VerificationConfig``
/ ``V3Config`` models which ``Settings`` can produce.
"""

from functools import lru_cache
from typing import Annotated, Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Scores are bounded to [0, 1], so nothing ever passes this threshold
UNREACHABLE_THRESHOLD = 5.0


class VerificationConfig(BaseModel):
    """Configuration shared by every client flavour."""

    model_config = ConfigDict(frozen=True)

    # Verify through www.recaptcha.net instead of www.google.com
    use_alternate_domain: bool = False
    # Hostnames / Android package names the token may be solved under (empty accepts all)
    allowed_hosts: frozenset[str] = frozenset()

    def host_allowed(self, host: str) -> bool:
        """Check a reported hostname against the allow-list."""
        return not self.allowed_hosts or host in self.allowed_hosts


class V3Config(VerificationConfig):
    """Configuration of a score based (v3) client."""

    score_threshold: float = 0.5
    # Only these actions are verifiable when set, others get UNREACHABLE_THRESHOLD
    limited_actions: frozenset[str] = frozenset()
    # Overrides both of the above when set
    action_threshold: Optional[Callable[[str], float]] = None

    def threshold_for(self, action: str) -> float:
        """Score threshold a token collected for ``action`` must exceed."""
        if self.action_threshold is not None:
            return self.action_threshold(action)
        if not self.limited_actions or action in self.limited_actions:
            return self.score_threshold
        return UNREACHABLE_THRESHOLD


def _split_csv(v: Any) -> Any:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Verifier settings loaded from RECAPTCHA_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECAPTCHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: str = ""
    enabled: bool = True
    use_alternate_domain: bool = False
    allowed_hosts: Annotated[list[str], NoDecode] = []

    # v3
    score_threshold: float = 0.5
    limited_actions: Annotated[list[str], NoDecode] = []

    # Transport
    timeout_seconds: float = 10.0

    @field_validator("allowed_hosts", "limited_actions", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        return _split_csv(v)

    def verification_config(self) -> VerificationConfig:
        return VerificationConfig(
            use_alternate_domain=self.use_alternate_domain,
            allowed_hosts=frozenset(self.allowed_hosts),
        )

    def v3_config(self) -> V3Config:
        return V3Config(
            use_alternate_domain=self.use_alternate_domain,
            allowed_hosts=frozenset(self.allowed_hosts),
            score_threshold=self.score_threshold,
            limited_actions=frozenset(self.limited_actions),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

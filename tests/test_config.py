from __future__ import annotations

import pydantic
import pytest

from recaptcha_verifier.config import (
    UNREACHABLE_THRESHOLD,
    Settings,
    V3Config,
    VerificationConfig,
)


def test_defaults() -> None:
    config = V3Config()
    assert not config.use_alternate_domain
    assert config.allowed_hosts == frozenset()
    assert config.score_threshold == 0.5
    assert config.threshold_for("anything") == 0.5


def test_configs_are_immutable() -> None:
    config = VerificationConfig(allowed_hosts=["wusatosi.com"])
    assert config.allowed_hosts == frozenset({"wusatosi.com"})
    with pytest.raises(pydantic.ValidationError):
        config.use_alternate_domain = True  # type: ignore[misc]


def test_host_allowed() -> None:
    assert VerificationConfig().host_allowed("whatever.example")
    restricted = VerificationConfig(allowed_hosts=frozenset({"wusatosi.com"}))
    assert restricted.host_allowed("wusatosi.com")
    assert not restricted.host_allowed("google.com")


def test_limited_actions_threshold() -> None:
    config = V3Config(score_threshold=0.3, limited_actions=frozenset({"click"}))
    assert config.threshold_for("click") == 0.3
    assert config.threshold_for("login") == UNREACHABLE_THRESHOLD


def test_action_threshold_overrides_limited_actions() -> None:
    config = V3Config(limited_actions=frozenset({"click"}), action_threshold=lambda action: 0.8)
    assert config.threshold_for("login") == 0.8


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "secret")
    monkeypatch.setenv("RECAPTCHA_USE_ALTERNATE_DOMAIN", "true")
    monkeypatch.setenv("RECAPTCHA_ALLOWED_HOSTS", "wusatosi.com, google.com")
    monkeypatch.setenv("RECAPTCHA_SCORE_THRESHOLD", "0.7")
    monkeypatch.setenv("RECAPTCHA_LIMITED_ACTIONS", "login,signup")

    settings = Settings(_env_file=None)
    assert settings.secret_key == "secret"
    assert settings.allowed_hosts == ["wusatosi.com", "google.com"]

    config = settings.v3_config()
    assert config.use_alternate_domain
    assert config.allowed_hosts == frozenset({"wusatosi.com", "google.com"})
    assert config.threshold_for("login") == 0.7
    assert config.threshold_for("click") == UNREACHABLE_THRESHOLD

    v2_config = settings.verification_config()
    assert type(v2_config) is VerificationConfig
    assert v2_config.allowed_hosts == config.allowed_hosts


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SECRET_KEY", "ALLOWED_HOSTS", "LIMITED_ACTIONS", "ENABLED"):
        monkeypatch.delenv(f"RECAPTCHA_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.enabled
    assert settings.secret_key == ""
    assert settings.allowed_hosts == []
    assert settings.timeout_seconds == 10.0

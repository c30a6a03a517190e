"""
Configuration: environment parsing and the production startup guard.
"""

from __future__ import annotations

import pytest

from backend.web.config import ensure_secure_config_on_startup, load_config

_VARS = (
    "FLEXSECTIONS_ENV",
    "FLEXSECTIONS_WWWROOT",
    "FLEXSECTIONS_PIX_URL",
    "FLEXSECTIONS_LOG_LEVEL",
    "FLEXSECTIONS_SUMMARY_FORMAT",
    "FLEXSECTIONS_STRICT_CSRF",
    "FLEXSECTIONS_TRUST_PROXY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg.env == "dev"
    assert cfg.wwwroot == "http://localhost:8000"
    assert cfg.pix_url == "http://localhost:8000/pix"
    assert cfg.log_level == "INFO"
    assert cfg.summary_format == "html"
    assert not cfg.is_prod_like
    assert not cfg.strict_csrf and not cfg.trust_proxy


def test_overrides_are_normalised(monkeypatch) -> None:
    monkeypatch.setenv("FLEXSECTIONS_WWWROOT", "https://lms.example.org/")
    monkeypatch.setenv("FLEXSECTIONS_LOG_LEVEL", "debug")
    monkeypatch.setenv("FLEXSECTIONS_SUMMARY_FORMAT", "Markdown")
    cfg = load_config()
    assert cfg.wwwroot == "https://lms.example.org"
    assert cfg.pix_url == "https://lms.example.org/pix"
    assert cfg.log_level == "DEBUG"
    assert cfg.summary_format == "markdown"


@pytest.mark.parametrize(
    "name, value",
    [
        ("FLEXSECTIONS_WWWROOT", "lms.example.org"),
        ("FLEXSECTIONS_PIX_URL", "ftp://cdn.example.org/pix"),
        ("FLEXSECTIONS_LOG_LEVEL", "LOUD"),
        ("FLEXSECTIONS_SUMMARY_FORMAT", "rtf"),
    ],
)
def test_invalid_values_raise_value_error(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_config()


def test_prod_requires_https(monkeypatch) -> None:
    monkeypatch.setenv("FLEXSECTIONS_ENV", "production")
    monkeypatch.setenv("FLEXSECTIONS_WWWROOT", "http://lms.example.org")
    with pytest.raises(SystemExit):
        ensure_secure_config_on_startup()

    monkeypatch.setenv("FLEXSECTIONS_WWWROOT", "https://lms.example.org")
    ensure_secure_config_on_startup()


def test_dev_stays_permissive(monkeypatch) -> None:
    monkeypatch.setenv("FLEXSECTIONS_WWWROOT", "http://localhost:9000")
    ensure_secure_config_on_startup()


def test_csrf_flags(monkeypatch) -> None:
    monkeypatch.setenv("FLEXSECTIONS_STRICT_CSRF", "TRUE")
    monkeypatch.setenv("FLEXSECTIONS_TRUST_PROXY", "yes")
    cfg = load_config()
    assert cfg.strict_csrf is True
    assert cfg.trust_proxy is False

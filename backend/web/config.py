"""
Configuration and startup checks for the flexsections web adapter.

Intent:
    Provide a single place to read the environment variables that control
    URL generation (wwwroot, icon location), logging and summary defaults.

Why:
    Rendered controls are links; a wrong wwwroot produces a page full of dead
    or insecure links. Validating once at startup keeps that failure loud.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from urllib.parse import urlparse

from backend.flexsections.domain import SUMMARY_FORMATS


@dataclass(frozen=True)
class FlexsectionsConfig:
    env: str
    wwwroot: str
    pix_url: str
    log_level: str
    summary_format: str
    strict_csrf: bool = False
    trust_proxy: bool = False

    @property
    def is_prod_like(self) -> bool:
        return _is_prod_like(self.env)


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def _validate_base_url(name: str, url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"{name} must be an absolute http(s) URL, got: {url!r}")
    return url.rstrip("/")


def _env_flag(name: str) -> bool:
    return (os.getenv(name, "false") or "").strip().lower() == "true"


def load_config() -> FlexsectionsConfig:
    """
    Parse and validate configuration from environment variables.

    Behavior:
        - `FLEXSECTIONS_WWWROOT` is the public base URL (default: http://localhost:8000).
        - `FLEXSECTIONS_PIX_URL` defaults to `{wwwroot}/pix`.
        - `FLEXSECTIONS_LOG_LEVEL` must name a stdlib logging level.
        - `FLEXSECTIONS_SUMMARY_FORMAT` is the default format of new summaries.
        - `FLEXSECTIONS_STRICT_CSRF=true` requires an Origin or Referer header on
          edit actions (always on in prod-like environments).
        - `FLEXSECTIONS_TRUST_PROXY=true` lets the same-origin check read
          X-Forwarded-* headers.
    """
    env = (os.getenv("FLEXSECTIONS_ENV") or "dev").strip().lower()
    wwwroot = _validate_base_url(
        "FLEXSECTIONS_WWWROOT", (os.getenv("FLEXSECTIONS_WWWROOT") or "http://localhost:8000").strip()
    )
    pix_url = _validate_base_url("FLEXSECTIONS_PIX_URL", (os.getenv("FLEXSECTIONS_PIX_URL") or f"{wwwroot}/pix").strip())

    log_level = (os.getenv("FLEXSECTIONS_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"FLEXSECTIONS_LOG_LEVEL is not a logging level: {log_level!r}")

    summary_format = (os.getenv("FLEXSECTIONS_SUMMARY_FORMAT") or "html").strip().lower()
    if summary_format not in SUMMARY_FORMATS:
        raise ValueError(f"FLEXSECTIONS_SUMMARY_FORMAT must be one of {', '.join(SUMMARY_FORMATS)}")

    return FlexsectionsConfig(
        env=env,
        wwwroot=wwwroot,
        pix_url=pix_url,
        log_level=log_level,
        summary_format=summary_format,
        strict_csrf=_env_flag("FLEXSECTIONS_STRICT_CSRF"),
        trust_proxy=_env_flag("FLEXSECTIONS_TRUST_PROXY"),
    )


def ensure_secure_config_on_startup(config: FlexsectionsConfig | None = None) -> None:
    """Fail fast on insecure production configuration.

    Checks (prod/stage only):
    - wwwroot and pix URL must use https, otherwise every rendered control
      link would downgrade the page.
    """
    cfg = config or load_config()
    if not cfg.is_prod_like:
        return  # dev/test remain permissive

    for var_name, value in (("FLEXSECTIONS_WWWROOT", cfg.wwwroot), ("FLEXSECTIONS_PIX_URL", cfg.pix_url)):
        if value.lower().startswith("http://"):
            raise SystemExit(f"Refusing to start: {var_name} must use https in production (got http).")


__all__ = ["FlexsectionsConfig", "load_config", "ensure_secure_config_on_startup"]

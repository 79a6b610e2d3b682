from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from wikibulk.core.errors import ConfigError

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def parse_boolish(value: str | None, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY_VALUES


def _parse_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ConfigError(f"{name} must be at least 1")
    return value


@dataclass(frozen=True)
class Settings:
    endpoint: str
    api_key: str
    locale: str = "en"
    http2: bool = False
    force_https: bool = True
    timeout_s: float = 30.0
    max_concurrency: int | None = None

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Read settings from the environment; non-None ``overrides`` (CLI flags) win."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        explicit = os.getenv("WIKIJS_GRAPHQL_URL", "").strip()
        base = os.getenv("WIKIJS_BASE_URL", "").strip().rstrip("/")
        endpoint = overrides.pop("endpoint", None) or explicit or (f"{base}/graphql" if base else "")
        token = overrides.pop("api_key", None) or os.getenv("WIKIJS_API_TOKEN", "")
        if not endpoint or not token:
            raise ConfigError("Wiki.js env not configured (WIKIJS_BASE_URL / WIKIJS_API_TOKEN)")

        timeout_raw = os.getenv("WIKIBULK_TIMEOUT", "").strip()
        try:
            timeout_s = float(timeout_raw) if timeout_raw else 30.0
        except ValueError:
            raise ConfigError(f"WIKIBULK_TIMEOUT must be a number, got {timeout_raw!r}")

        values = dict(
            endpoint=endpoint,
            api_key=token,
            locale=os.getenv("WIKIJS_LOCALE", "en") or "en",
            http2=parse_boolish(os.getenv("WIKIBULK_HTTP2")),
            force_https=parse_boolish(os.getenv("WIKIBULK_FORCE_HTTPS"), default=True),
            timeout_s=timeout_s,
            max_concurrency=_parse_optional_int("WIKIBULK_MAX_CONCURRENCY"),
        )
        values.update(overrides)
        settings = cls(**values)
        settings.validate()
        return settings

    def validate(self) -> None:
        scheme = urlparse(self.endpoint).scheme
        if scheme not in ("http", "https"):
            raise ConfigError(f"Endpoint must be an http(s) URL: {self.endpoint!r}")
        if self.force_https and scheme != "https":
            raise ConfigError(
                f"Endpoint {self.endpoint!r} is not https; set WIKIBULK_FORCE_HTTPS=0 or pass --no-force-https"
            )


def missing_env() -> list[str]:
    missing: list[str] = []
    if not (os.getenv("WIKIJS_BASE_URL") or os.getenv("WIKIJS_GRAPHQL_URL")):
        missing.append("WIKIJS_BASE_URL missing")
    if not os.getenv("WIKIJS_API_TOKEN"):
        missing.append("WIKIJS_API_TOKEN missing")
    return missing

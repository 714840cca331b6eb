"""Client configuration and YAML loading."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict
from urllib.parse import urlparse

import yaml

from oilpriceapi.errors import ConfigError
from oilpriceapi.retry import RetryStrategy

DEFAULT_BASE_URL = "https://api.oilpriceapi.com"

_INT_FIELDS = ("max_retries", "retry_delay_ms", "timeout_ms")


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a client makes."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = 3
    retry_delay_ms: int = 1000
    retry_strategy: RetryStrategy = RetryStrategy.EXPONENTIAL
    timeout_ms: int = 90000
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.api_key or not isinstance(self.api_key, str):
            raise ConfigError("API key is required")
        if not isinstance(self.base_url, str) or urlparse(self.base_url).scheme not in ("http", "https"):
            raise ConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.max_retries < 0:
            raise ConfigError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay_ms <= 0:
            raise ConfigError(f"retry_delay_ms must be > 0, got {self.retry_delay_ms}")
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be > 0, got {self.timeout_ms}")
        try:
            strategy = RetryStrategy(self.retry_strategy)
        except ValueError as exc:
            choices = ", ".join(s.value for s in RetryStrategy)
            raise ConfigError(f"retry_strategy must be one of: {choices}") from exc
        object.__setattr__(self, "retry_strategy", strategy)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, max_retries={self.max_retries}, "
            f"retry_delay_ms={self.retry_delay_ms}, retry_strategy={self.retry_strategy.value!r}, "
            f"timeout_ms={self.timeout_ms}, debug={self.debug})"
        )


def load_config(path: str, **overrides: Any) -> ClientConfig:
    """Load a client configuration from a YAML file.

    Keyword overrides that are not None take precedence over the file.
    """
    raw = yaml.safe_load(_read_file(path)) or {}
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must be a mapping/object.")

    known = {f.name for f in fields(ClientConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys {unknown} in {path}")

    values: Dict[str, Any] = dict(raw)
    values.update({key: value for key, value in overrides.items() if value is not None})

    for name in _INT_FIELDS:
        if name in values:
            try:
                values[name] = int(values[name])
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{name} must be an integer") from exc
    if "debug" in values:
        values["debug"] = bool(values["debug"])

    return ClientConfig(api_key=str(values.pop("api_key", "") or ""), **values)


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc

"""Tests for configuration utilities."""

from pathlib import Path

import pytest

from oilpriceapi.config import DEFAULT_BASE_URL, ClientConfig, ConfigError, load_config
from oilpriceapi.retry import RetryStrategy


def test_defaults() -> None:
    config = ClientConfig(api_key="key")

    assert config.base_url == DEFAULT_BASE_URL
    assert config.max_retries == 3
    assert config.retry_delay_ms == 1000
    assert config.retry_strategy is RetryStrategy.EXPONENTIAL
    assert config.timeout_ms == 90000
    assert config.timeout_seconds == 90.0
    assert config.debug is False


@pytest.mark.parametrize("api_key", ["", None])
def test_missing_api_key_fails_immediately(api_key) -> None:
    with pytest.raises(ConfigError, match="API key is required"):
        ClientConfig(api_key=api_key)


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_retries": -1},
        {"retry_delay_ms": 0},
        {"timeout_ms": 0},
        {"retry_strategy": "random"},
        {"base_url": ""},
        {"base_url": "api.oilpriceapi.com"},
        {"base_url": "ftp://api.oilpriceapi.com"},
        {"max_retries": 2.5},
        {"max_retries": "3"},
        {"retry_delay_ms": 10.0},
        {"timeout_ms": True},
    ],
)
def test_out_of_range_settings_rejected(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        ClientConfig(api_key="key", **overrides)


def test_strategy_string_is_coerced() -> None:
    assert ClientConfig(api_key="key", retry_strategy="linear").retry_strategy is RetryStrategy.LINEAR


def test_config_is_immutable() -> None:
    config = ClientConfig(api_key="key")
    with pytest.raises(AttributeError):
        config.max_retries = 5  # type: ignore[misc]


def test_repr_hides_api_key() -> None:
    assert "secret" not in repr(ClientConfig(api_key="secret"))


def test_load_config_with_overrides(tmp_path: Path) -> None:
    content = """\
api_key: file_key
base_url: https://staging.example.com
max_retries: 5
retry_delay_ms: 250
retry_strategy: fixed
timeout_ms: 30000
debug: true
"""
    file_path = tmp_path / "client.yml"
    file_path.write_text(content, encoding="utf-8")

    config = load_config(str(file_path), max_retries=1, api_key=None)

    assert config == ClientConfig(
        api_key="file_key",
        base_url="https://staging.example.com",
        max_retries=1,
        retry_delay_ms=250,
        retry_strategy=RetryStrategy.FIXED,
        timeout_ms=30000,
        debug=True,
    )


def test_load_config_invalid_structure_raises(tmp_path: Path) -> None:
    file_path = tmp_path / "client.yml"
    file_path.write_text("- not a mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(file_path))


def test_load_config_unknown_keys_raise(tmp_path: Path) -> None:
    file_path = tmp_path / "client.yml"
    file_path.write_text("api_key: k\nretries: 3\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="retries"):
        load_config(str(file_path))


def test_load_config_empty_file_needs_api_key(tmp_path: Path) -> None:
    file_path = tmp_path / "client.yml"
    file_path.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(file_path))
    assert load_config(str(file_path), api_key="from_flag").api_key == "from_flag"


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "missing.yml"))


def test_plain_http_base_url_is_accepted() -> None:
    assert ClientConfig(api_key="key", base_url="http://localhost:8080").base_url == "http://localhost:8080"

"""Unit tests for `sundries.config`."""

import pytest

from sundries import config

# pylint: disable=magic-value-comparison


def test_default_max_buffer_is_ten_megabytes():
    """Without the env var the default is 10 MiB."""
    assert config.get_default_max_buffer() == 10_485_760
    assert config.TEN_MEGABYTES_IN_BYTES == 10_485_760
    assert config.DEFAULT_PLATFORM_MAX_BUFFER == 1_048_576


@pytest.mark.parametrize("value", ["", "   "])
def test_empty_env_var_uses_default(monkeypatch, value):
    """An empty SUNDRIES_MAX_BUFFER counts as unset."""
    monkeypatch.setenv(config.MAX_BUFFER_ENV_VAR, value)
    assert config.get_default_max_buffer() == config.TEN_MEGABYTES_IN_BYTES


def test_env_var_overrides_default(monkeypatch):
    """A positive integer in SUNDRIES_MAX_BUFFER replaces the default."""
    monkeypatch.setenv(config.MAX_BUFFER_ENV_VAR, " 2048 ")
    assert config.get_default_max_buffer() == 2048


@pytest.mark.parametrize("value", ["abc", "1.5", "0", "-1"])
def test_invalid_env_var_raises(monkeypatch, value):
    """Anything but a positive integer is reported with the offending value."""
    monkeypatch.setenv(config.MAX_BUFFER_ENV_VAR, value)
    with pytest.raises(config.InvalidMaxBufferError) as exc_info:
        config.get_default_max_buffer()
    assert exc_info.value.value == value
    assert config.MAX_BUFFER_ENV_VAR in str(exc_info.value)

"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- BindingConfig model
- PropBindConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propbind.config.models import (
    BindingConfig,
    LoggingConfig,
    LogOutputConfig,
    PropBindConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout", "/var/log/propbind.log"])
    def test_valid_destinations(self, destination: str) -> None:
        """Streams and absolute paths are accepted."""
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/propbind.log")

    def test_invalid_format_fails(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level_fails(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestBindingConfig:
    """Tests for BindingConfig model."""

    def test_defaults(self) -> None:
        """Defaults favor full visibility and failing fast."""
        config = BindingConfig()
        assert config.bypass_visibility is True
        assert config.unwrap_optional is True
        assert config.missing_property == "raise"
        assert config.cache_size == 1024

    def test_ignore_policy(self) -> None:
        assert BindingConfig(missing_property="ignore").missing_property == "ignore"

    def test_unknown_policy_fails(self) -> None:
        with pytest.raises(ValidationError):
            BindingConfig(missing_property="warn")  # type: ignore[arg-type]

    def test_zero_cache_size_allowed(self) -> None:
        assert BindingConfig(cache_size=0).cache_size == 0

    def test_negative_cache_size_fails(self) -> None:
        with pytest.raises(ValidationError, match="cache_size must be >= 0"):
            BindingConfig(cache_size=-1)


class TestPropBindConfig:
    """Tests for PropBindConfig root model."""

    def test_sections_default(self) -> None:
        config = PropBindConfig()
        assert isinstance(config.binding, BindingConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_nested_dict_is_validated(self) -> None:
        config = PropBindConfig.model_validate({"binding": {"unwrap_optional": False}})
        assert config.binding.unwrap_optional is False
        assert config.binding.bypass_visibility is True

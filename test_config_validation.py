"""
Test suite for configuration validation functionality.
Tests the config_validator module and configuration handling.
"""

import importlib
import os

import pytest
from types import SimpleNamespace
from unittest.mock import patch

import config
import config_validator
from error_handler import ConfigurationError


def _make_config(**overrides):
    values = {
        "log_level": "INFO",
        "log_directory": "logs",
        "log_to_file": False,
        "enhancer_min_percentage_points": 2,
        "enhancer_min_card_length": 10,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestConfigValidation:
    """Test configuration validation functionality."""

    def test_validate_config_all_valid(self):
        assert config_validator.validate_config(_make_config()) is True

    def test_invalid_log_level_reset(self):
        mock_config = _make_config(log_level="LOUD")
        assert config_validator.validate_config(mock_config) is False
        assert mock_config.log_level == "INFO"

    @pytest.mark.parametrize("value", [0, -3, "abc", None, True])
    def test_invalid_positive_int_reset(self, value):
        mock_config = _make_config(enhancer_min_card_length=value)
        assert config_validator.validate_config(mock_config) is False
        assert mock_config.enhancer_min_card_length == config.DEFAULTS["enhancer_min_card_length"]

    def test_numeric_string_accepted(self):
        mock_config = _make_config(enhancer_min_percentage_points="4")
        assert config_validator.validate_config(mock_config) is True
        assert mock_config.enhancer_min_percentage_points == 4

    def test_empty_log_directory_only_matters_with_file_logging(self):
        assert config_validator.validate_config(_make_config(log_directory="")) is True

        mock_config = _make_config(log_directory="", log_to_file=True)
        assert config_validator.validate_config(mock_config) is False
        assert mock_config.log_directory == "logs"

    def test_strict_raises(self):
        with pytest.raises(ConfigurationError):
            config_validator.validate_config(_make_config(log_level=None), strict=True)

    def test_config_validation_logging(self):
        """Test that configuration validation produces appropriate log messages."""
        with patch('config_validator.logger') as mock_logger:
            config_validator.validate_config(_make_config(log_level="nope"))
            mock_logger.warning.assert_called()


class TestEnvironmentLoading:
    """Test that config reads environment variables."""

    def test_environment_values(self):
        env_vars = {
            'LOG_LEVEL': 'debug',
            'LOG_TO_FILE': 'yes',
            'ENHANCER_MIN_PERCENTAGE_POINTS': '5',
            'ENHANCER_MIN_CARD_LENGTH': 'not-a-number',
        }
        try:
            with patch.dict(os.environ, env_vars), patch('dotenv.load_dotenv'):
                reloaded = importlib.reload(config)

            assert reloaded.log_level == 'DEBUG'
            assert reloaded.log_to_file is True
            assert reloaded.enhancer_min_percentage_points == 5
            assert reloaded.enhancer_min_card_length == 10
        finally:
            with patch('dotenv.load_dotenv'):
                importlib.reload(config)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

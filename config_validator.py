import logging

import config
from error_handler import ConfigurationError

logger = logging.getLogger('response_visualizer.config_validator')

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _validate_log_level(config_module):
    """Validate the configured log level name."""
    level = getattr(config_module, "log_level", None)
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        logger.warning(
            f"Invalid log_level in config ('{level}'). Using default {config.DEFAULTS['log_level']}."
        )
        config_module.log_level = config.DEFAULTS['log_level']
        return False
    return True


def _validate_log_directory(config_module):
    """Validate the log directory when file logging is enabled."""
    if not getattr(config_module, "log_to_file", False):
        return True

    directory = getattr(config_module, "log_directory", None)
    if not isinstance(directory, str) or not directory.strip():
        logger.warning(
            f"log_directory in config is empty. Using default '{config.DEFAULTS['log_directory']}'."
        )
        config_module.log_directory = config.DEFAULTS['log_directory']
        return False
    return True


def _validate_positive_int(config_module, attr_name):
    """Validate a positive integer setting, resetting it to its default when invalid."""
    value = getattr(config_module, attr_name, None)
    default = config.DEFAULTS[attr_name]

    try:
        parsed = int(value)
        if isinstance(value, bool) or parsed <= 0:
            logger.warning(f"{attr_name} in config ('{value}') must be positive. Using default {default}.")
            setattr(config_module, attr_name, default)
            return False
    except (ValueError, TypeError):
        logger.warning(f"Invalid {attr_name} in config ('{value}'), using default {default}.")
        setattr(config_module, attr_name, default)
        return False

    setattr(config_module, attr_name, parsed)
    return True


def validate_config(config_module=config, strict=False):
    """
    Validate the runtime configuration (config.py)

    Invalid values are replaced by their defaults and reported as warnings.

    Args:
        config_module: The imported config module
        strict: Raise instead of returning False when something was invalid

    Returns:
        bool: True if every setting was valid

    Raises:
        ConfigurationError: If strict is set and a setting was invalid
    """
    results = [
        _validate_log_level(config_module),
        _validate_log_directory(config_module),
        _validate_positive_int(config_module, "enhancer_min_percentage_points"),
        _validate_positive_int(config_module, "enhancer_min_card_length"),
    ]
    is_valid = all(results)

    if is_valid:
        logger.info(
            f"Configuration valid: log level {config_module.log_level}, "
            f"file logging {'on' if getattr(config_module, 'log_to_file', False) else 'off'}"
        )
    elif strict:
        raise ConfigurationError("One or more configuration values are invalid")

    return is_valid

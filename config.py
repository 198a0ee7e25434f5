"""
Response visualizer configuration using environment variables and .env file support.

This module loads configuration from environment variables with .env file taking precedence.
The .env file values override system environment variables to ensure consistent configuration.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
# Use override=True to prioritize .env file over system environment variables
load_dotenv(override=True)


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, keeping the default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


# Logging Configuration (optional)
# Environment variables: LOG_LEVEL, LOG_DIRECTORY, LOG_TO_FILE
# Default: INFO to the console only
log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
log_directory = os.getenv('LOG_DIRECTORY', 'logs')
log_to_file = _bool_env('LOG_TO_FILE', False)

# Response Enhancer Configuration (optional)
# Environment variable: ENHANCER_MIN_PERCENTAGE_POINTS
# Number of "N% of ..." statements needed before a pie chart is suggested
enhancer_min_percentage_points = _int_env('ENHANCER_MIN_PERCENTAGE_POINTS', 2)

# Environment variable: ENHANCER_MIN_CARD_LENGTH
# Callout paragraphs shorter than this are not turned into cards
enhancer_min_card_length = _int_env('ENHANCER_MIN_CARD_LENGTH', 10)

# Defaults used when a configured value fails validation
DEFAULTS = {
    'log_level': 'INFO',
    'log_directory': 'logs',
    'enhancer_min_percentage_points': 2,
    'enhancer_min_card_length': 10,
}

import logging
import os
import sys
from datetime import datetime

import config


def _console_handler():
    """Build a console handler that survives non-UTF-8 terminals."""
    if sys.platform.startswith('win'):
        # On Windows, try to use UTF-8 for console output
        try:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.stream.reconfigure(encoding='utf-8')
            return console_handler
        except (AttributeError, OSError):
            # Fallback: create a custom handler that handles encoding errors gracefully
            class SafeStreamHandler(logging.StreamHandler):
                def emit(self, record):
                    try:
                        super().emit(record)
                    except UnicodeEncodeError:
                        # Replace problematic characters and try again
                        msg = self.format(record)
                        safe_msg = msg.encode('ascii', errors='replace').decode('ascii')
                        print(safe_msg)
            return SafeStreamHandler(sys.stdout)

    # On Unix-like systems, UTF-8 is usually the default
    return logging.StreamHandler()


def setup_logging():
    """Sets up logging for the visualizer with proper Unicode support."""
    handlers = [_console_handler()]

    if config.log_to_file:
        log_directory = config.log_directory
        if not os.path.exists(log_directory):
            os.makedirs(log_directory)

        # Create a unique log file name with timestamp
        log_filename = f"{log_directory}/visualizer_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"
        handlers.append(logging.FileHandler(log_filename, encoding='utf-8'))

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    logger = logging.getLogger('response_visualizer')
    return logger

# Initialize logger when this module is imported
logger = setup_logging()

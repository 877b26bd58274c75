from alumni_backend.common.environment_constants import LOG_LEVEL
import logging
import os

_logger_initialized = False


def _setup_logger():
    """
    Configure the logging system once, using the level from the environment.

    The level is read from the 'LOG_LEVEL' environment variable (case-insensitive,
    defaulting to 'INFO'). The format includes timestamp, level and message.
    """
    global _logger_initialized
    if _logger_initialized:
        return

    log_level = os.environ.get(LOG_LEVEL, "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")
    _logger_initialized = True


def get_logger(name="alumni_backend"):
    """
    Returns a configured logger instance.

    Args:
        name (str, optional): The name of the logger. Defaults to "alumni_backend".

    Returns:
        logging.Logger: A configured logger instance.
    """
    _setup_logger()
    return logging.getLogger(name)

# src/circuitsim_core/log_config.py
import logging
import os
import sys

PACKAGE_LOGGER_NAME = "circuitsim_core"
LOG_LEVEL_ENV_VAR = "CIRCUITSIM_LOG_LEVEL"


def setup_logging(level=None):
    """
    Configures the package logger to write to stdout.

    The level defaults to the value of the CIRCUITSIM_LOG_LEVEL environment
    variable (a level name such as "DEBUG"), falling back to WARNING so that a
    running simulation does not flood the console with per-tick messages.
    """
    if level is None:
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.WARNING

    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # Clear existing handlers so repeated calls do not duplicate output
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    package_logger.setLevel(level)
    package_logger.addHandler(console_handler)
    package_logger.info("Logging configured.")

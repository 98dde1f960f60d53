# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Logging setup for the dicomtag command-line tool

Library modules only create loggers; handlers are installed here when the
CLI runs.

Copyright 2025 DNAi inc.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from dicomtag import config


def setup_logging(
    name: str = config.LOGGER_NAME,
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging for dicomtag.

    Args:
        name: Logger name
        level: Logging level name, defaults to config.get_log_level()
        log_file: Optional file path to write logs to
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    level = (level or config.get_log_level()).upper()
    if format_string is None:
        format_string = config.get_log_format()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))

    # Replace handlers from an earlier call
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

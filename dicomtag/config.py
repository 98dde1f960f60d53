# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Configuration for dicomtag

Defaults for the command-line tool. Environment variables override the
defaults and are read when the CLI starts, not at import time.

Copyright 2025 DNAi inc.
"""

import os

LOGGER_NAME = "dicomtag"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_LEVEL_ENV = "DICOMTAG_LOG_LEVEL"
LOG_FORMAT_ENV = "DICOMTAG_LOG_FORMAT"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Output formats accepted by the CLI
OUTPUT_FORMATS = ("text", "json")


def get_log_level() -> str:
    """Get the log level name from the environment, or the default."""
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    if level not in LOG_LEVELS:
        return DEFAULT_LOG_LEVEL
    return level


def get_log_format() -> str:
    return os.environ.get(LOG_FORMAT_ENV) or DEFAULT_LOG_FORMAT

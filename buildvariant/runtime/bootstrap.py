# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for buildvariant.

The one-time setup before any resolution happens:
  1. Validate the interpreter version
  2. Apply the configured log level and log file to every buildvariant logger
  3. Log a startup line with system info

Module loggers are created at import time with the default level. Step 2
walks the ones that already exist, re-levels them and adds the file handler,
so `--log-level DEBUG` and `global.log_file` reach the signing and policy
modules too.
"""

import logging
from pathlib import Path
from typing import Optional

from buildvariant import __version__
from buildvariant.config.schema import GlobalConfig
from buildvariant.logging.logger import get_logger
from buildvariant.runtime.environment import check_minimum_python, get_system_info

PACKAGE_LOGGER_PREFIX = "buildvariant"


def apply_log_level(log_level: str, log_file: Optional[Path] = None) -> None:
    """Re-level every existing buildvariant logger and attach log_file to each."""
    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(existing, logging.Logger):
            continue  # PlaceHolder for a parent nobody asked for
        if name == PACKAGE_LOGGER_PREFIX or name.startswith(PACKAGE_LOGGER_PREFIX + "."):
            get_logger(name, log_level=log_level, log_file=log_file)


def bootstrap(config: GlobalConfig, log_level_override: Optional[str] = None) -> logging.Logger:
    """
    Run the bootstrap sequence.

    Args:
        config: The validated global configuration.
        log_level_override: Level from the command line, wins over config.

    Returns:
        The runtime logger.
    """
    check_minimum_python()

    log_level = log_level_override or config.log_level
    log_file = Path(config.log_file) if config.log_file is not None else None

    apply_log_level(log_level, log_file=log_file)
    logger = get_logger("buildvariant.runtime", log_level=log_level, log_file=log_file)

    system_info = get_system_info()
    logger.info(
        "buildvariant bootstrap complete",
        extra={
            "version": __version__,
            "project": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
    return logger

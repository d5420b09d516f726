# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the configuration system.

We keep these separate so that CLI and other layers can catch config-specific
failures without importing the entire config machinery. Signing inputs count
as configuration too: a broken key.properties is a ConfigError.
"""

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation.
    This covers missing required fields, type mismatches, out-of-range values,
    and any other structural problem.
    """


class ConfigParseError(ConfigError):
    """
    Raised when a signing properties file exists but cannot be trusted.

    Carries the source and, where it is known, the 1-based line number of the
    offending line so the operator can go straight to it.
    """

    def __init__(
        self,
        message: str,
        source: str | Path = "<string>",
        line_number: Optional[int] = None,
    ) -> None:
        self.source = str(source)
        self.line_number = line_number
        location = self.source if line_number is None else f"{self.source}:{line_number}"
        super().__init__(f"{location}: {message}")

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

These are the only exit codes the CLI uses. Build scripts branch on them,
so the numbers are fixed.
"""

SUCCESS: int = 0
USER_ERROR: int = 1  # bad variant selector, no subcommand
CONFIG_ERROR: int = 2  # unreadable config, malformed key.properties
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4  # debug signing refused, failed pre-flight checks

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release signing inputs: the key.properties reader and SigningCredentials.
"""

from buildvariant.signing.credentials import (
    DEBUG_SIGNING,
    SigningCredentials,
    resolve_credentials,
)

__all__ = ["DEBUG_SIGNING", "SigningCredentials", "resolve_credentials"]

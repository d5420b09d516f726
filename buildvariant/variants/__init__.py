# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build variant resolution.

Turns a build type plus optional release credentials into a VariantPolicy:
minification, resource shrinking, signing, and BuildConfig flags.
"""

from buildvariant.variants.exceptions import (
    DebugSigningNotAllowedError,
    InvalidVariantError,
    ResolverError,
)
from buildvariant.variants.policy import BuildConfigField, VariantPolicy, resolve_policy
from buildvariant.variants.variant import BuildVariant, SigningSource, parse_variant

__all__ = [
    "BuildConfigField",
    "BuildVariant",
    "DebugSigningNotAllowedError",
    "InvalidVariantError",
    "ResolverError",
    "SigningSource",
    "VariantPolicy",
    "parse_variant",
    "resolve_policy",
]

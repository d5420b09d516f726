# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Build variants and selector parsing."""

from enum import Enum

from buildvariant.variants.exceptions import InvalidVariantError


class BuildVariant(str, Enum):
    DEBUG = "debug"
    RELEASE = "release"


class SigningSource(str, Enum):
    """Where a policy's signing came from."""

    RELEASE = "release"
    DEBUG = "debug"
    DEBUG_FALLBACK = "debug_fallback"


def parse_variant(selector: "str | BuildVariant") -> BuildVariant:
    """
    Map a build-type selector to a BuildVariant.

    Matching is case-insensitive and ignores surrounding whitespace, so the
    Gradle spelling ("Release", as in assembleRelease) works too.

    Raises:
        InvalidVariantError: For anything that isn't debug or release.
    """
    if isinstance(selector, BuildVariant):
        return selector
    if not isinstance(selector, str):
        raise InvalidVariantError(
            f"Build type selector must be a string, got {type(selector).__name__}"
        )

    normalized = selector.strip().lower()
    for variant in BuildVariant:
        if variant.value == normalized:
            return variant

    valid = ", ".join(v.value for v in BuildVariant)
    raise InvalidVariantError(f"Unknown build type '{selector}'. Must be one of: {valid}")

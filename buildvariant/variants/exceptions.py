# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Errors raised while turning a variant selector into a policy."""


class ResolverError(Exception):
    """Base for all variant resolution errors."""


class InvalidVariantError(ResolverError):
    """Raised when a build-type selector is not one of the known variants."""


class DebugSigningNotAllowedError(ResolverError):
    """
    Raised when a release variant has no release credentials and the caller
    has not opted in to debug signing. A release artifact signed with the
    debug key must never be distributed, so without an explicit opt-in the
    build stops here.
    """

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Variant policy resolution, the one real decision in an Android build script.

Given a variant and the (possibly absent) release credentials, decide:
  - whether R8 minifies code and shrinks resources
  - which ProGuard files it reads
  - which key signs the artifact
  - the compile-time flags exposed through BuildConfig

Debug builds are always debug-signed, unminified, and log verbosely. Release
builds are minified, quiet, and release-signed when credentials exist.

A release without credentials is the dangerous case. The Gradle script this
replaces silently signed it with the debug key. Here the fallback is either
refused (DebugSigningNotAllowedError) or, when allowed, reported twice: a
WARNING log record and signing_source=DEBUG_FALLBACK on the returned policy,
so anything downstream can check it without parsing logs.

resolve_policy reads nothing from disk and keeps no state. Same inputs, equal
policy.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from buildvariant.config.schema import ProguardConfig
from buildvariant.logging.logger import get_logger
from buildvariant.signing.credentials import DEBUG_SIGNING, SigningCredentials
from buildvariant.variants.exceptions import DebugSigningNotAllowedError
from buildvariant.variants.variant import BuildVariant, SigningSource, parse_variant

_logger: logging.Logger = get_logger(__name__)

DEBUG_LOGGING_FIELD = "ENABLE_DEBUG_LOGGING"


@dataclass(frozen=True)
class BuildConfigField:
    """
    One generated BuildConfig constant, as in Gradle's
    buildConfigField(type, name, value). value is a Java literal.
    """

    type: str
    name: str
    value: str


@dataclass(frozen=True)
class VariantPolicy:
    """Everything a variant decides. Computed once, never mutated."""

    variant: BuildVariant
    minify: bool
    shrink_resources: bool
    signing: SigningCredentials
    signing_source: SigningSource
    debug_logging_enabled: bool
    proguard_files: tuple[str, ...] = ()
    build_config_fields: tuple[BuildConfigField, ...] = ()

    @property
    def is_debug_signed(self) -> bool:
        return self.signing_source in (SigningSource.DEBUG, SigningSource.DEBUG_FALLBACK)


def _java_bool(value: bool) -> str:
    return "true" if value else "false"


def _release_signing(
    credentials: Optional[SigningCredentials],
    allow_debug_signing: bool,
) -> tuple[SigningCredentials, SigningSource]:
    if credentials is not None:
        return credentials, SigningSource.RELEASE

    if not allow_debug_signing:
        raise DebugSigningNotAllowedError(
            "Release build has no signing credentials (key.properties missing) and "
            "debug signing is not allowed. Create key.properties, or pass "
            "--allow-debug-signing for a local, non-distributable build."
        )

    _logger.warning(
        "Release variant falls back to debug signing; artifact must not be distributed",
        extra={
            "variant": BuildVariant.RELEASE.value,
            "signing_source": SigningSource.DEBUG_FALLBACK.value,
            "key_alias": DEBUG_SIGNING.key_alias,
        },
    )
    return DEBUG_SIGNING, SigningSource.DEBUG_FALLBACK


def resolve_policy(
    variant: "BuildVariant | str",
    credentials: Optional[SigningCredentials],
    *,
    allow_debug_signing: bool = True,
    proguard: Optional[ProguardConfig] = None,
) -> VariantPolicy:
    """
    Derive the VariantPolicy for one build.

    Args:
        variant: BuildVariant or a selector string such as "release".
        credentials: Release credentials from resolve_credentials, or None.
        allow_debug_signing: Whether a release without credentials may fall
            back to the debug key. The CLI defaults this to False.
        proguard: ProGuard inputs for minified variants. Defaults to the
            stock Flutter project layout.

    Returns:
        The frozen policy for this variant.

    Raises:
        InvalidVariantError: Unknown selector.
        DebugSigningNotAllowedError: Release, no credentials, no opt-in.
    """
    resolved = parse_variant(variant)
    proguard = proguard or ProguardConfig()

    if resolved is BuildVariant.RELEASE:
        signing, source = _release_signing(credentials, allow_debug_signing)
        return VariantPolicy(
            variant=resolved,
            minify=True,
            shrink_resources=True,
            signing=signing,
            signing_source=source,
            debug_logging_enabled=False,
            proguard_files=(proguard.default_file, *proguard.rules_files),
            build_config_fields=(
                BuildConfigField("boolean", DEBUG_LOGGING_FIELD, _java_bool(False)),
            ),
        )

    return VariantPolicy(
        variant=resolved,
        minify=False,
        shrink_resources=False,
        signing=DEBUG_SIGNING,
        signing_source=SigningSource.DEBUG,
        debug_logging_enabled=True,
        proguard_files=(),
        build_config_fields=(
            BuildConfigField("boolean", DEBUG_LOGGING_FIELD, _java_bool(True)),
        ),
    )

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Pre-flight checks on signing and minification inputs.

Run before handing a plan to Gradle. A release build that is going to be
debug-signed, or point at a keystore that isn't there, should fail here with
a clear message rather than ten minutes into an R8 pass.

Checks:
- credentials_file: key.properties present (only a failure for release)
- release_signing: release variant is not debug-signed
- keystore_exists: resolved keystore exists and is non-empty
- proguard_rules: every project rules file exists
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from buildvariant.logging.logger import get_logger
from buildvariant.variants.policy import VariantPolicy
from buildvariant.variants.variant import BuildVariant, SigningSource

_logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class PreflightCheck:
    """Result of a single pre-flight check."""

    name: str
    passed: bool
    message: str


def check_credentials_file(policy: VariantPolicy, credentials_file: Path) -> PreflightCheck:
    if credentials_file.is_file():
        return PreflightCheck(
            name="credentials_file",
            passed=True,
            message=f"Signing properties found at {credentials_file}",
        )
    is_release = policy.variant is BuildVariant.RELEASE
    return PreflightCheck(
        name="credentials_file",
        passed=not is_release,
        message=(
            f"No signing properties at {credentials_file}"
            + ("; release cannot be release-signed" if is_release else " (fine for debug)")
        ),
    )


def check_release_signing(policy: VariantPolicy) -> PreflightCheck:
    if policy.variant is not BuildVariant.RELEASE:
        return PreflightCheck(
            name="release_signing",
            passed=True,
            message="Debug variant is debug-signed by definition",
        )
    if policy.signing_source is SigningSource.DEBUG_FALLBACK:
        return PreflightCheck(
            name="release_signing",
            passed=False,
            message="Release variant is signed with the debug key and must not be distributed",
        )
    return PreflightCheck(
        name="release_signing",
        passed=True,
        message=f"Release variant signed with key '{policy.signing.key_alias}'",
    )


def check_keystore(policy: VariantPolicy, base_dir: Path) -> PreflightCheck:
    """
    Verify the keystore the policy signs with is on disk.

    The debug keystore is created by the Android tooling on demand, so it is
    not checked.
    """
    if policy.is_debug_signed:
        return PreflightCheck(
            name="keystore_exists",
            passed=True,
            message="Debug keystore is managed by the Android SDK, check skipped",
        )

    keystore = policy.signing.resolve_store_file(base_dir)
    if not keystore.is_file():
        return PreflightCheck(
            name="keystore_exists",
            passed=False,
            message=f"Keystore not found: {keystore}",
        )
    try:
        size = keystore.stat().st_size
    except OSError as err:
        return PreflightCheck(
            name="keystore_exists",
            passed=False,
            message=f"Cannot stat keystore {keystore}: {err}",
        )
    if size == 0:
        return PreflightCheck(
            name="keystore_exists",
            passed=False,
            message=f"Keystore is empty (0 bytes): {keystore}",
        )
    return PreflightCheck(
        name="keystore_exists",
        passed=True,
        message=f"Keystore present: {keystore}",
    )


def check_proguard_rules(policy: VariantPolicy, proguard_dir: Path) -> PreflightCheck:
    """
    Verify project ProGuard rules files exist.

    The first entry of proguard_files is the SDK default (resolved by the
    Android plugin), so only the project files after it are checked.
    """
    if not policy.minify:
        return PreflightCheck(
            name="proguard_rules",
            passed=True,
            message="Variant is not minified, no ProGuard rules needed",
        )

    project_files = policy.proguard_files[1:]
    missing = [name for name in project_files if not (proguard_dir / name).is_file()]
    if missing:
        return PreflightCheck(
            name="proguard_rules",
            passed=False,
            message=f"Missing ProGuard rules in {proguard_dir}: {', '.join(missing)}",
        )
    return PreflightCheck(
        name="proguard_rules",
        passed=True,
        message=f"{len(project_files)} ProGuard rules file(s) present",
    )


def run_preflight(
    policy: VariantPolicy,
    credentials_file: Path,
    base_dir: Path,
    proguard_dir: Optional[Path] = None,
) -> list[PreflightCheck]:
    """
    Run all pre-flight checks for a resolved policy.

    Callers inspect each check's `passed` field to decide whether to proceed.

    Args:
        policy: The resolved variant policy.
        credentials_file: Where key.properties was looked for.
        base_dir: Directory storeFile and ProGuard rules are relative to
            (the application module).
        proguard_dir: Override for the ProGuard rules directory. Defaults
            to base_dir.

    Returns:
        One PreflightCheck per check, in a fixed order.
    """
    checks = [
        check_credentials_file(policy, credentials_file),
        check_release_signing(policy),
        check_keystore(policy, base_dir),
        check_proguard_rules(policy, proguard_dir or base_dir),
    ]

    passed_count = sum(1 for c in checks if c.passed)
    failed_count = len(checks) - passed_count

    for check in checks:
        log_fn = _logger.info if check.passed else _logger.error
        log_fn(
            "Pre-flight check",
            extra={
                "check": check.name,
                "passed": check.passed,
                "check_message": check.message,
            },
        )

    _logger.info(
        "Pre-flight checks complete",
        extra={"variant": policy.variant.value, "passed": passed_count, "failed": failed_count},
    )

    return checks

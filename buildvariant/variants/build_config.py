# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
BuildConfig.java generation.

Mirrors what the Android Gradle plugin emits with buildFeatures.buildConfig
enabled: the standard constants followed by one line per buildConfigField of
the build type. Application code reads ENABLE_DEBUG_LOGGING from here.
"""

import logging
from pathlib import Path

from buildvariant.config.schema import AndroidConfig
from buildvariant.logging.logger import get_logger
from buildvariant.utils.filesystem import atomic_write
from buildvariant.variants.policy import VariantPolicy
from buildvariant.variants.variant import BuildVariant

_logger: logging.Logger = get_logger(__name__)


def _java_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_build_config(policy: VariantPolicy, android: AndroidConfig) -> str:
    """Return the Java source of <namespace>.BuildConfig for this policy."""
    is_debug = policy.variant is BuildVariant.DEBUG
    lines = [
        "/**",
        " * Automatically generated file. DO NOT MODIFY",
        " */",
        f"package {android.namespace};",
        "",
        "public final class BuildConfig {",
        f'  public static final boolean DEBUG = Boolean.parseBoolean("{str(is_debug).lower()}");',
        f"  public static final String APPLICATION_ID = "
        f"{_java_string(android.effective_application_id)};",
        f"  public static final String BUILD_TYPE = {_java_string(policy.variant.value)};",
        f"  public static final int VERSION_CODE = {android.version_code};",
        f"  public static final String VERSION_NAME = {_java_string(android.version_name)};",
    ]

    if policy.build_config_fields:
        lines.append(f"  // Field from build type: {policy.variant.value}")
        for field in policy.build_config_fields:
            lines.append(f"  public static final {field.type} {field.name} = {field.value};")

    lines.append("}")
    return "\n".join(lines) + "\n"


def build_config_path(android: AndroidConfig, out_dir: Path) -> Path:
    """Where BuildConfig.java goes under a generated-sources root."""
    return out_dir.joinpath(*android.namespace.split("."), "BuildConfig.java")


def write_build_config(policy: VariantPolicy, android: AndroidConfig, out_dir: Path) -> Path:
    """
    Render and atomically write BuildConfig.java.

    Returns:
        The path of the written file.
    """
    target = build_config_path(android, out_dir)
    atomic_write(target, render_build_config(policy, android))
    _logger.info(
        "Wrote BuildConfig",
        extra={
            "path": str(target),
            "variant": policy.variant.value,
            "fields": [f.name for f in policy.build_config_fields],
        },
    )
    return target

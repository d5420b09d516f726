# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for buildvariant.

Each config section gets its own frozen pydantic model. Frozen means once you
create it, you cannot mutate it. The resolver computes a policy once per build
and nothing is allowed to change the inputs underneath it.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Only `global:` is required. A project that never builds BuildConfig.java can
leave out `android:` entirely, and `signing:` / `proguard:` fall back to the
layout a stock Flutter project uses.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Dotted Java package name, e.g. com.directcuts.app
JAVA_PACKAGE_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)+$"


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: project identity and observability.

    This is the first section loaded and it controls the log level and the
    optional log file every command writes to.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="app", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )


class AndroidConfig(BaseModel):
    """
    The values the Android block of the build script fixes for every variant.

    Only namespace, SDK levels and version are needed by the resolver itself;
    the rest is carried into the build plan so the toolchain sees one record
    of what the build was configured to do.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    namespace: str = Field(
        pattern=JAVA_PACKAGE_PATTERN,
        description="Java package of the generated R and BuildConfig classes",
    )
    application_id: Optional[str] = Field(
        default=None,
        pattern=JAVA_PACKAGE_PATTERN,
        description="Package name on device; defaults to the namespace",
    )
    compile_sdk: int = Field(default=35, ge=1)
    min_sdk: int = Field(default=21, ge=1)
    target_sdk: int = Field(default=35, ge=1)
    ndk_version: Optional[str] = Field(default=None)
    version_code: int = Field(default=1, ge=1)
    version_name: str = Field(default="1.0.0", min_length=1)
    java_version: int = Field(
        default=17,
        ge=8,
        description="sourceCompatibility / targetCompatibility / jvmTarget",
    )
    core_library_desugaring: bool = Field(
        default=True,
        description="Needed by plugins such as flutter_local_notifications",
    )
    desugar_library: str = Field(
        default="com.android.tools:desugar_jdk_libs:2.0.4",
        description="Maven coordinate added as coreLibraryDesugaring dependency",
    )
    multidex: bool = Field(default=True)
    legacy_jni_packaging: bool = Field(
        default=True,
        description="Store native libs uncompressed-legacy, skips symbol stripping",
    )

    @model_validator(mode="after")
    def _check_sdk_ordering(self) -> "AndroidConfig":
        if not self.min_sdk <= self.target_sdk <= self.compile_sdk:
            raise ValueError(
                "SDK levels must satisfy min_sdk <= target_sdk <= compile_sdk, got "
                f"min_sdk={self.min_sdk}, target_sdk={self.target_sdk}, "
                f"compile_sdk={self.compile_sdk}"
            )
        return self

    @property
    def effective_application_id(self) -> str:
        return self.application_id or self.namespace


class SigningConfig(BaseModel):
    """
    Where the release signing inputs live.

    properties_file is relative to the project directory (the Gradle root
    project). storeFile values inside it are relative to store_file_base,
    which is the application module, not the root project.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    properties_file: str = Field(default="key.properties", min_length=1)
    store_file_base: str = Field(default="app")
    allow_debug_signing: bool = Field(
        default=False,
        description="Permit release builds to fall back to the debug keystore",
    )


class ProguardConfig(BaseModel):
    """R8/ProGuard inputs for minified variants."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    default_file: str = Field(
        default="proguard-android-optimize.txt",
        description="SDK-provided default rules, resolved by the Android plugin",
    )
    rules_files: list[str] = Field(
        default_factory=lambda: ["proguard-rules.pro"],
        description="Project rules files, relative to the application module",
    )


class BuildVariantConfig(BaseModel):
    """
    Top-level config container.

    Sections not present in the YAML stay at their defaults (or None for
    android) and that's fine. Commands validate they have what they need.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    android: Optional[AndroidConfig] = Field(default=None)
    signing: SigningConfig = Field(default_factory=SigningConfig)
    proguard: ProguardConfig = Field(default_factory=ProguardConfig)

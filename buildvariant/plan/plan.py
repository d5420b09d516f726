# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build plan: the resolved policy in the form the external toolchain reads.

A plan records, for one build invocation:
  - the variant and every flag its policy set
  - the Android settings the build script fixes (SDKs, Java target,
    desugaring dependency, multidex, JNI packaging)
  - which key signs the artifact and where that decision came from
  - the SHA256 of the key.properties it was resolved from
  - a content hash of the plan itself

Plans never carry passwords. The keystore and key passwords are rendered as
the pydantic SecretStr mask, and the only path to clear text is
injected_signing_properties(..., reveal_secrets=True), whose output is meant
for a Gradle command line or a 0600 properties file, not for disk archives.

There is no timestamp in the plan, so identical inputs give an identical
plan_hash.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from buildvariant import __version__
from buildvariant.config.schema import AndroidConfig
from buildvariant.logging.logger import get_logger
from buildvariant.utils.filesystem import atomic_write
from buildvariant.utils.hashing import compute_sha256, compute_sha256_bytes
from buildvariant.variants.policy import VariantPolicy

_logger: logging.Logger = get_logger(__name__)

SECRET_MASK = "**********"

INJECTED_STORE_FILE = "android.injected.signing.store.file"
INJECTED_STORE_PASSWORD = "android.injected.signing.store.password"
INJECTED_KEY_ALIAS = "android.injected.signing.key.alias"
INJECTED_KEY_PASSWORD = "android.injected.signing.key.password"


@dataclass(frozen=True)
class BuildPlan:
    """Everything the toolchain needs to know about one build, minus secrets."""

    buildvariant_version: str
    variant: str
    minify: bool
    shrink_resources: bool
    debug_logging_enabled: bool
    proguard_files: list[str]
    build_config_fields: dict[str, str]
    signing: dict[str, str]
    credentials_file: Optional[str]
    credentials_sha256: Optional[str]
    android: Optional[dict[str, object]] = None
    plan_hash: str = field(default="")


def _hash_plan_body(body: dict[str, object]) -> str:
    encoded = json.dumps(body, sort_keys=True, default=str).encode("utf-8")
    return compute_sha256_bytes(encoded)


def _android_section(android: AndroidConfig) -> dict[str, object]:
    section: dict[str, object] = android.model_dump()
    section["application_id"] = android.effective_application_id
    if android.core_library_desugaring:
        section["dependencies"] = {"coreLibraryDesugaring": [android.desugar_library]}
    return section


def create_build_plan(
    policy: VariantPolicy,
    android: Optional[AndroidConfig] = None,
    credentials_file: Optional[Path] = None,
    store_file_base: Optional[Path] = None,
) -> BuildPlan:
    """
    Assemble a BuildPlan from a resolved policy.

    Args:
        policy: The resolved variant policy.
        android: Android project settings, if the config has them.
        credentials_file: The key.properties path the policy was resolved
            from. Hashed when it exists.
        store_file_base: Directory a relative storeFile is anchored at.
            Defaults to the current working directory.

    Returns:
        A frozen BuildPlan with plan_hash filled in.
    """
    base_dir = store_file_base if store_file_base is not None else Path.cwd()

    credentials_sha256 = None
    if credentials_file is not None and credentials_file.is_file():
        credentials_sha256 = compute_sha256(credentials_file)

    plan = BuildPlan(
        buildvariant_version=__version__,
        variant=policy.variant.value,
        minify=policy.minify,
        shrink_resources=policy.shrink_resources,
        debug_logging_enabled=policy.debug_logging_enabled,
        proguard_files=list(policy.proguard_files),
        build_config_fields={f.name: f.value for f in policy.build_config_fields},
        signing={
            "source": policy.signing_source.value,
            "key_alias": policy.signing.key_alias,
            "store_file": str(policy.signing.resolve_store_file(base_dir)),
            "key_password": SECRET_MASK,
            "store_password": SECRET_MASK,
        },
        credentials_file=str(credentials_file) if credentials_file is not None else None,
        credentials_sha256=credentials_sha256,
        android=_android_section(android) if android is not None else None,
    )

    body = asdict(plan)
    body.pop("plan_hash")
    return BuildPlan(**{**asdict(plan), "plan_hash": _hash_plan_body(body)})


def plan_to_dict(plan: BuildPlan) -> dict[str, object]:
    """JSON-ready dict of the plan."""
    return asdict(plan)


def write_build_plan(plan: BuildPlan, path: Path) -> None:
    """Atomically write the plan as pretty-printed JSON with sorted keys."""
    content = json.dumps(plan_to_dict(plan), indent=2, sort_keys=True, default=str)
    atomic_write(path, content + "\n")
    _logger.info(
        "Build plan written",
        extra={"path": str(path), "variant": plan.variant, "plan_hash": plan.plan_hash},
    )


def load_build_plan(path: Path) -> BuildPlan:
    """
    Read a plan written by write_build_plan.

    Raises:
        ValueError: If the file is not a JSON object with every plan field.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Build plan {path} is not a JSON object")

    required = set(BuildPlan.__dataclass_fields__)
    missing = required - set(data)
    if missing:
        raise ValueError(f"Build plan {path} missing required fields: {sorted(missing)}")

    return BuildPlan(**{key: data[key] for key in required})


def injected_signing_properties(
    policy: VariantPolicy,
    base_dir: Path,
    reveal_secrets: bool = False,
) -> dict[str, str]:
    """
    The android.injected.signing.* properties for this policy.

    The Android Gradle plugin signs with these in place of the signingConfig
    declared in the build script. Passwords stay masked unless
    reveal_secrets is set.
    """
    signing = policy.signing
    if reveal_secrets:
        store_password = signing.store_password.get_secret_value()
        key_password = signing.key_password.get_secret_value()
    else:
        store_password = key_password = SECRET_MASK

    return {
        INJECTED_STORE_FILE: str(signing.resolve_store_file(base_dir)),
        INJECTED_STORE_PASSWORD: store_password,
        INJECTED_KEY_ALIAS: signing.key_alias,
        INJECTED_KEY_PASSWORD: key_password,
    }


def render_gradle_args(properties: dict[str, str]) -> list[str]:
    """Turn a properties dict into Gradle -Pkey=value arguments, in key order."""
    return [f"-P{key}={properties[key]}" for key in sorted(properties)]

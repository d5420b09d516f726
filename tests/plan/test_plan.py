# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for build plans and injected signing properties.
"""

import json
from pathlib import Path

import pytest

from buildvariant.config.schema import AndroidConfig
from buildvariant.plan.plan import (
    INJECTED_KEY_ALIAS,
    INJECTED_KEY_PASSWORD,
    INJECTED_STORE_FILE,
    INJECTED_STORE_PASSWORD,
    SECRET_MASK,
    create_build_plan,
    injected_signing_properties,
    load_build_plan,
    plan_to_dict,
    render_gradle_args,
    write_build_plan,
)
from buildvariant.signing.credentials import SigningCredentials, resolve_credentials
from buildvariant.utils.hashing import compute_sha256
from buildvariant.variants.policy import resolve_policy

ANDROID = AndroidConfig(namespace="com.directcuts.app", version_code=3, version_name="1.0.3")


class TestCreatePlan:
    def test_release_plan_records_policy(self, key_properties_file: Path) -> None:
        credentials = resolve_credentials(key_properties_file)
        app_dir = key_properties_file.parent / "app"
        policy = resolve_policy("release", credentials)

        plan = create_build_plan(
            policy,
            android=ANDROID,
            credentials_file=key_properties_file,
            store_file_base=app_dir,
        )

        assert plan.variant == "release"
        assert plan.minify is True
        assert plan.shrink_resources is True
        assert plan.debug_logging_enabled is False
        assert plan.build_config_fields == {"ENABLE_DEBUG_LOGGING": "false"}
        assert plan.signing["source"] == "release"
        assert plan.signing["key_alias"] == "upload"
        assert plan.signing["store_file"] == str((app_dir / "upload-keystore.jks").absolute())
        assert plan.credentials_sha256 == compute_sha256(key_properties_file)

    def test_android_section(self) -> None:
        plan = create_build_plan(resolve_policy("debug", None), android=ANDROID)
        assert plan.android is not None
        assert plan.android["application_id"] == "com.directcuts.app"
        assert plan.android["java_version"] == 17
        assert plan.android["dependencies"] == {
            "coreLibraryDesugaring": ["com.android.tools:desugar_jdk_libs:2.0.4"]
        }

    def test_no_desugaring_dependency_when_disabled(self) -> None:
        android = AndroidConfig(namespace="com.directcuts.app", core_library_desugaring=False)
        plan = create_build_plan(resolve_policy("debug", None), android=android)
        assert plan.android is not None
        assert "dependencies" not in plan.android

    def test_missing_credentials_file_has_no_hash(self, tmp_path: Path) -> None:
        plan = create_build_plan(
            resolve_policy("release", None), credentials_file=tmp_path / "key.properties"
        )
        assert plan.signing["source"] == "debug_fallback"
        assert plan.credentials_sha256 is None
        assert plan.credentials_file == str(tmp_path / "key.properties")

    def test_plan_hash_is_stable(self, release_credentials: SigningCredentials, tmp_path: Path) -> None:
        policy = resolve_policy("release", release_credentials)
        first = create_build_plan(policy, android=ANDROID, store_file_base=tmp_path)
        second = create_build_plan(policy, android=ANDROID, store_file_base=tmp_path)
        assert first.plan_hash == second.plan_hash
        assert len(first.plan_hash) == 64

    def test_plan_hash_changes_with_variant(self, tmp_path: Path) -> None:
        debug = create_build_plan(resolve_policy("debug", None), store_file_base=tmp_path)
        release = create_build_plan(resolve_policy("release", None), store_file_base=tmp_path)
        assert debug.plan_hash != release.plan_hash


class TestSecretsStayOut:
    def test_plan_masks_passwords(self, release_credentials: SigningCredentials) -> None:
        plan = create_build_plan(resolve_policy("release", release_credentials))
        serialized = json.dumps(plan_to_dict(plan))
        assert "s3cret" not in serialized
        assert plan.signing["key_password"] == SECRET_MASK
        assert plan.signing["store_password"] == SECRET_MASK

    def test_written_plan_masks_passwords(
        self, release_credentials: SigningCredentials, tmp_path: Path
    ) -> None:
        path = tmp_path / "build" / "plan.json"
        write_build_plan(create_build_plan(resolve_policy("release", release_credentials)), path)
        assert "s3cret" not in path.read_text(encoding="utf-8")


class TestWriteAndLoad:
    def test_written_plan_loads_back(self, release_credentials: SigningCredentials, tmp_path: Path) -> None:
        plan = create_build_plan(resolve_policy("release", release_credentials), android=ANDROID)
        path = tmp_path / "plan.json"
        write_build_plan(plan, path)

        assert load_build_plan(path) == plan

    def test_load_rejects_incomplete_plan(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"variant": "release"}), encoding="utf-8")
        with pytest.raises(ValueError, match="missing required fields"):
            load_build_plan(path)


class TestInjectedSigning:
    def test_masked_by_default(self, release_credentials: SigningCredentials, tmp_path: Path) -> None:
        policy = resolve_policy("release", release_credentials)
        props = injected_signing_properties(policy, tmp_path)

        assert props[INJECTED_STORE_FILE] == str(tmp_path / "upload-keystore.jks")
        assert props[INJECTED_KEY_ALIAS] == "upload"
        assert props[INJECTED_STORE_PASSWORD] == SECRET_MASK
        assert props[INJECTED_KEY_PASSWORD] == SECRET_MASK

    def test_reveal_secrets(self, release_credentials: SigningCredentials, tmp_path: Path) -> None:
        policy = resolve_policy("release", release_credentials)
        props = injected_signing_properties(policy, tmp_path, reveal_secrets=True)

        assert props[INJECTED_STORE_PASSWORD] == "s3cret-store"
        assert props[INJECTED_KEY_PASSWORD] == "s3cret-key"

    def test_debug_signing_properties(self, tmp_path: Path) -> None:
        props = injected_signing_properties(resolve_policy("debug", None), tmp_path, True)
        assert props[INJECTED_KEY_ALIAS] == "androiddebugkey"
        assert props[INJECTED_STORE_PASSWORD] == "android"

    def test_render_gradle_args_sorted(self) -> None:
        args = render_gradle_args({"b.key": "2", "a.key": "1"})
        assert args == ["-Pa.key=1", "-Pb.key=2"]

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for buildvariant tests.

The layout mirrors a Flutter Android project: `android/` is the root project
holding key.properties, `android/app/` is the application module where the
keystore and proguard-rules.pro live.
"""

import textwrap
from pathlib import Path

import pytest

from buildvariant.signing.credentials import SigningCredentials, credentials_from_properties

KEY_PROPERTIES = textwrap.dedent("""\
    # Generated by create_keystore.sh
    storePassword=s3cret-store
    keyPassword=s3cret-key
    keyAlias=upload
    storeFile=upload-keystore.jks
""")


@pytest.fixture()
def android_project(tmp_path: Path) -> Path:
    """An android/ root project with an app/ module and proguard rules, but no key.properties."""
    project = tmp_path / "android"
    app = project / "app"
    app.mkdir(parents=True)
    (app / "proguard-rules.pro").write_text("-keep class io.flutter.** { *; }\n", encoding="utf-8")
    return project


@pytest.fixture()
def key_properties_file(android_project: Path) -> Path:
    """A well-formed key.properties plus the keystore it points at."""
    properties = android_project / "key.properties"
    properties.write_text(KEY_PROPERTIES, encoding="utf-8")
    (android_project / "app" / "upload-keystore.jks").write_bytes(b"\xfe\xed\xfe\xed keystore")
    return properties


@pytest.fixture()
def release_credentials() -> SigningCredentials:
    return credentials_from_properties(
        {
            "keyAlias": "upload",
            "keyPassword": "s3cret-key",
            "storeFile": "upload-keystore.jks",
            "storePassword": "s3cret-store",
        }
    )


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A config with every section filled in."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "directcuts"
          log_level: "DEBUG"
        android:
          namespace: "com.directcuts.app"
          compile_sdk: 35
          min_sdk: 23
          target_sdk: 35
          version_code: 7
          version_name: "1.2.0"
        signing:
          properties_file: "key.properties"
          store_file_base: "app"
    """)
    config_file = tmp_path / "buildvariant.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (missing config_version)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "directcuts"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file

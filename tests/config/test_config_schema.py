# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level checks on AndroidConfig: package names and SDK ordering.
"""

import pytest
from pydantic import ValidationError

from buildvariant.config.schema import AndroidConfig


def test_application_id_defaults_to_namespace() -> None:
    android = AndroidConfig(namespace="com.directcuts.app")
    assert android.application_id is None
    assert android.effective_application_id == "com.directcuts.app"


def test_explicit_application_id_wins() -> None:
    android = AndroidConfig(namespace="com.directcuts.app", application_id="com.directcuts.beta")
    assert android.effective_application_id == "com.directcuts.beta"


@pytest.mark.parametrize("namespace", ["app", "com..app", "com.1app", "com.direct-cuts.app", ""])
def test_rejects_invalid_namespace(namespace: str) -> None:
    with pytest.raises(ValidationError):
        AndroidConfig(namespace=namespace)


def test_rejects_min_sdk_above_target() -> None:
    with pytest.raises(ValidationError, match="min_sdk <= target_sdk <= compile_sdk"):
        AndroidConfig(namespace="com.directcuts.app", min_sdk=30, target_sdk=29, compile_sdk=34)


def test_rejects_target_sdk_above_compile() -> None:
    with pytest.raises(ValidationError):
        AndroidConfig(namespace="com.directcuts.app", target_sdk=35, compile_sdk=34)


def test_rejects_zero_version_code() -> None:
    with pytest.raises(ValidationError):
        AndroidConfig(namespace="com.directcuts.app", version_code=0)


def test_rejects_java_below_8() -> None:
    with pytest.raises(ValidationError):
        AndroidConfig(namespace="com.directcuts.app", java_version=7)

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Signing credentials and the loader that reads them from key.properties.

key.properties is optional. Local development machines don't have one, and
that is the normal state, not a failure. When the file is there, though, it
must be complete: the four keys below, all non-blank. Anything less and we
refuse to guess.

Passwords are pydantic SecretStr values. Their repr, str() and JSON
serialization are masked; the only way to the clear text is an explicit
get_secret_value() call, which happens exactly once, where the injected
Gradle properties are rendered with reveal_secrets=True.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from buildvariant.config.exceptions import ConfigParseError
from buildvariant.logging.logger import get_logger
from buildvariant.signing.properties import parse_properties
from buildvariant.utils.paths import resolve_against

_logger: logging.Logger = get_logger(__name__)

# Property name in key.properties -> field name on SigningCredentials
PROPERTY_KEYS: dict[str, str] = {
    "keyAlias": "key_alias",
    "keyPassword": "key_password",
    "storeFile": "store_file",
    "storePassword": "store_password",
}


class SigningCredentials(BaseModel):
    """Key material reference plus the passwords to unlock it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_alias: str = Field(min_length=1)
    key_password: SecretStr
    store_file: Path
    store_password: SecretStr

    def resolve_store_file(self, base_dir: Path) -> Path:
        """Absolute keystore path, with relative values anchored at base_dir."""
        return resolve_against(self.store_file, base_dir)


# The keystore the Android SDK creates on first debug build. Everyone has
# the same passwords; that is the point of it.
DEBUG_SIGNING = SigningCredentials(
    key_alias="androiddebugkey",
    key_password=SecretStr("android"),
    store_file=Path("~/.android/debug.keystore"),
    store_password=SecretStr("android"),
)


def credentials_from_properties(
    properties: dict[str, str], source: str | Path = "<string>"
) -> SigningCredentials:
    """
    Build SigningCredentials from an already-parsed properties mapping.

    Raises:
        ConfigParseError: If any of the four keys is missing or blank.
    """
    missing = [key for key in PROPERTY_KEYS if not properties.get(key, "").strip()]
    if missing:
        raise ConfigParseError(
            f"Missing or empty signing properties: {', '.join(missing)}", source
        )

    unknown = sorted(set(properties) - set(PROPERTY_KEYS))
    if unknown:
        _logger.debug(
            "Ignoring unknown signing properties",
            extra={"source": str(source), "keys": unknown},
        )

    return SigningCredentials(
        key_alias=properties["keyAlias"],
        key_password=SecretStr(properties["keyPassword"]),
        store_file=Path(properties["storeFile"]),
        store_password=SecretStr(properties["storePassword"]),
    )


def resolve_credentials(properties_file_path: Path) -> Optional[SigningCredentials]:
    """
    Load release signing credentials from a key.properties file.

    Args:
        properties_file_path: Where key.properties is expected to be.

    Returns:
        The parsed credentials, or None if the file does not exist.

    Raises:
        ConfigParseError: If the path exists but is not a readable, complete,
            well-formed properties file.
    """
    if not properties_file_path.exists():
        _logger.info(
            "No signing properties file, release signing unavailable",
            extra={"properties_file": str(properties_file_path)},
        )
        return None

    if not properties_file_path.is_file():
        raise ConfigParseError("Signing properties path is not a file", properties_file_path)

    try:
        # utf-8-sig drops a leading BOM so it can't end up in the first key.
        text = properties_file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as err:
        raise ConfigParseError(f"File is not valid UTF-8: {err}", properties_file_path) from err
    except OSError as err:
        raise ConfigParseError(f"Cannot read file: {err}", properties_file_path) from err

    properties = parse_properties(text, source=properties_file_path)
    credentials = credentials_from_properties(properties, source=properties_file_path)

    _logger.info(
        "Loaded signing credentials",
        extra={
            "properties_file": str(properties_file_path),
            "key_alias": credentials.key_alias,
            "store_file": str(credentials.store_file),
        },
    )
    return credentials

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for buildvariant.

Config values are relative paths. What they are relative to differs
(key.properties to the root project, storeFile to the app module), so the
base directory is always passed in explicitly.
"""

from pathlib import Path


def resolve_against(path: str | Path, base_dir: Path) -> Path:
    """
    Turn a config-supplied path into an absolute one.

    `~` is expanded first; absolute paths are kept as they are, relative ones
    are joined onto base_dir. The result is not required to exist.

    Args:
        path: The path as written in a config or properties file.
        base_dir: Directory relative paths are anchored to.

    Returns:
        An absolute path.
    """
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.absolute()

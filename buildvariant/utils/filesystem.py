# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Safe filesystem operations for buildvariant.

Build plans and generated BuildConfig sources are read by a separate Gradle
process. A half-written file there is worse than no file, so every write goes
through a temp file in the target directory followed by a rename. Rename on
the same filesystem is atomic on POSIX.
"""

import os
import tempfile
from pathlib import Path


def atomic_write(
    target_path: Path,
    content: str,
    encoding: str = "utf-8",
    mode: int | None = None,
) -> None:
    """
    Write content to a file atomically.

    We write to a temp file in the same directory, then rename it onto the
    target path. If anything goes wrong during the write (disk full,
    permissions, crash), the target file is never touched.

    Args:
        target_path: Where the final file should end up.
        content: The string content to write.
        encoding: Text encoding to use.
        mode: Optional permission bits applied before the rename, e.g. 0o600
              for files holding signing secrets.

    Raises:
        OSError: If the write or rename fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    # delete=False because the file has to survive closing so we can rename it.
    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(target_path.parent),
        prefix=".buildvariant_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        if mode is not None:
            os.chmod(temp_path, mode)
        temp_path.replace(target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise

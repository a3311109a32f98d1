"""Atomic file writes.

Content is written to a temporary file in the destination directory and
then renamed over the target, so readers never observe a half-written
manifest or build-info file.
"""

import os
import stat
import tempfile

from .constants import StampConstants


def write_text_atomic(path: str, content: str) -> None:
    """Write content to path atomically.

    Args:
        path: Destination file path. Its directory must exist.
        content: Text to write (UTF-8).

    Raises:
        OSError: If the temporary file cannot be written or renamed.
    """
    dir_name = os.path.dirname(path) or '.'
    base_name = os.path.basename(path)

    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            newline='\n',
            dir=dir_name,
            prefix=StampConstants.ATOMIC_WRITE_PREFIX + base_name,
            suffix=StampConstants.ATOMIC_WRITE_SUFFIX,
            delete=False
        ) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        # Keep the permissions of the file being replaced
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            mode = 0o644
        os.chmod(temp_filename, mode)

        # Atomic rename
        os.replace(temp_filename, path)
        temp_filename = None
    finally:
        # Clean up temp file if the rename never happened
        if temp_filename is not None:
            try:
                os.remove(temp_filename)
            except OSError:
                pass

"""Small filesystem helpers used around the result document."""

import base64
import logging
import os
import shutil
import struct
from pathlib import Path

log = logging.getLogger(__name__)


def store_screenshot(data: str | bytes, file: str | Path) -> bool:
    """Write base64 encoded image ``data`` to ``file`` as raw bytes.

    Failures are logged, never raised.

    Returns:
        True if the file was written, False otherwise

    """
    path = Path(file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(base64.b64decode(data))
    except Exception:
        log.error("Could not save image: %s", path, exc_info=True)
        return False
    return True


def generate_guid() -> str:
    """Return a random 128-bit identifier.

    The value is formatted as eight lowercase 4-digit hex groups laid out
    ``xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx``. No version or variant bits are
    set.
    """
    groups = [f"{word:04x}" for word in struct.unpack("<8H", os.urandom(16))]
    return (
        f"{groups[0]}{groups[1]}-{groups[2]}-{groups[3]}-"
        f"{groups[4]}-{groups[5]}{groups[6]}{groups[7]}"
    )


def remove_directory(path: str | Path) -> None:
    """Delete ``path`` with everything below it.

    A missing path or a path that is not a directory is ignored.
    """
    path = Path(path)
    if not path.is_dir():
        return
    shutil.rmtree(path)
    log.debug("Removed directory %s", path)

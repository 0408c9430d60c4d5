import os
from pathlib import Path
from typing import Union

from cambridge_extension.logging import get_logger

logger = get_logger(__name__)

EXECUTABLE_MODE = 0o755


def is_regular_file(path: Union[str, Path]) -> bool:
    """True if path names an existing regular file."""
    try:
        return Path(path).is_file()
    except OSError:
        return False


def make_executable(path: Union[str, Path]) -> None:
    """Set rwxr-xr-x permissions on a file."""
    os.chmod(path, EXECUTABLE_MODE)
    logger.debug({"event": "file_made_executable", "path": str(path)})

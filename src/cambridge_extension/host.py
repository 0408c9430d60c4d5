"""Host capabilities consumed by the resolver.

The resolver never touches the network, the search path or the status UI
directly; it goes through a ``Host``. ``LocalHost`` implements the port for
a plain machine.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from cambridge_extension import platforms
from cambridge_extension.errors import MakeExecutableError
from cambridge_extension.logging import get_logger
from cambridge_extension.types import DownloadedFileType, InstallationStatus, PlatformKey
from cambridge_extension.utils.fetching import download_url, extract_archive, gunzip_file
from cambridge_extension.utils.fs import make_executable

logger = get_logger(__name__)

ARCHIVE_SUFFIXES = {
    DownloadedFileType.GZIP: ".gz",
    DownloadedFileType.GZIP_TAR: ".tar.gz",
    DownloadedFileType.ZIP: ".zip",
}


class Host(Protocol):
    """Port: the embedding runtime's extension API."""

    def current_platform(self) -> PlatformKey:
        ...

    async def download_file(self, url: str, dest: str, file_type: DownloadedFileType) -> None:
        """Fetch url to dest. Archives are extracted into the directory dest."""
        ...

    def make_file_executable(self, path: str) -> None:
        ...

    def set_installation_status(self, language_server_id: str, status: InstallationStatus) -> None:
        ...

    def which(self, name: str) -> Optional[str]:
        ...


class LocalHost:
    """Host backed by the local filesystem, aiohttp and shutil."""

    def __init__(self) -> None:
        self.statuses: Dict[str, InstallationStatus] = {}
        self.history: List[Tuple[str, InstallationStatus]] = []

    def current_platform(self) -> PlatformKey:
        return platforms.current_platform()

    async def download_file(self, url: str, dest: str, file_type: DownloadedFileType) -> None:
        dest_path = Path(dest)
        logger.info({"event": "download_started", "url": url, "dest": dest, "type": file_type.name})

        if file_type == DownloadedFileType.UNCOMPRESSED:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            await download_url(url, dest_path)
        else:
            suffix = ARCHIVE_SUFFIXES[file_type]
            with tempfile.TemporaryDirectory() as tmpdir:
                archive = Path(tmpdir) / f"download{suffix}"
                await download_url(url, archive)
                if file_type == DownloadedFileType.GZIP:
                    dest_path.parent.mkdir(parents=True, exist_ok=True)
                    gunzip_file(archive, dest_path)
                else:
                    extract_archive(archive, dest_path)

        logger.info({"event": "download_complete", "url": url, "dest": dest})

    def make_file_executable(self, path: str) -> None:
        try:
            make_executable(path)
        except OSError as e:
            raise MakeExecutableError(path, str(e)) from e

    def set_installation_status(self, language_server_id: str, status: InstallationStatus) -> None:
        self.statuses[language_server_id] = status
        self.history.append((language_server_id, status))
        logger.info({
            "event": "installation_status",
            "language_server_id": language_server_id,
            "status": status.value
        })

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

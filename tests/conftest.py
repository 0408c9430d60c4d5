from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from cambridge_extension.types import (
    Architecture,
    DownloadedFileType,
    ExtensionConfig,
    InstallationStatus,
    Os,
    PlatformKey,
)


class FakeHost:
    """Host double that records every call and writes downloads to disk."""

    def __init__(self, platform: PlatformKey = PlatformKey(Os.LINUX, Architecture.X8664)):
        self.platform = platform
        self.downloads: List[Tuple[str, str, DownloadedFileType]] = []
        self.executables: List[str] = []
        self.status_history: List[InstallationStatus] = []
        self.path_entries: dict = {}
        self.download_error: Optional[Exception] = None
        self.chmod_error: Optional[Exception] = None

    def current_platform(self) -> PlatformKey:
        return self.platform

    async def download_file(self, url: str, dest: str, file_type: DownloadedFileType) -> None:
        self.downloads.append((url, dest, file_type))
        if self.download_error:
            raise self.download_error
        Path(dest).write_bytes(b"#!/bin/sh\n")

    def make_file_executable(self, path: str) -> None:
        if self.chmod_error:
            raise self.chmod_error
        self.executables.append(path)

    def set_installation_status(self, language_server_id: str, status: InstallationStatus) -> None:
        self.status_history.append(status)

    def which(self, name: str) -> Optional[str]:
        return self.path_entries.get(name)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def config(tmp_path):
    return ExtensionConfig(binary_dir=tmp_path)


@pytest.fixture
def make_host():
    return FakeHost

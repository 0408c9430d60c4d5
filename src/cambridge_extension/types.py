"""Core type definitions"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from cambridge_extension.constants import BINARY_NAME, LANGUAGE_SERVER_ID

Os = Enum('Os', ['MAC', 'LINUX', 'WINDOWS'])
Architecture = Enum('Architecture', ['AARCH64', 'X86', 'X8664', 'OTHER'])
DownloadedFileType = Enum('DownloadedFileType', ['UNCOMPRESSED', 'GZIP', 'GZIP_TAR', 'ZIP'])


class InstallationStatus(Enum):
    """Coarse language server installation state reported to the host"""
    NONE = "none"
    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"
    FAILED = "failed"


class ResolveStrategy(Enum):
    """How the language server binary is obtained"""
    DOWNLOAD = "download"
    SEARCH_PATH = "search-path"


@dataclass(frozen=True)
class PlatformKey:
    """Host operating system and architecture"""
    os: Os
    arch: Architecture

    def __str__(self) -> str:
        return f"{self.os.name.lower()}-{self.arch.name.lower()}"


@dataclass(frozen=True)
class DownloadTarget:
    """Where a release asset comes from and where it lands"""
    url: str
    dest: str


@dataclass(frozen=True)
class Command:
    """Process descriptor the host uses to spawn the language server"""
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}


@dataclass(frozen=True)
class ExtensionConfig:
    """Resolver configuration"""
    binary_name: str = BINARY_NAME
    binary_dir: Path = Path(".")
    strategy: ResolveStrategy = ResolveStrategy.DOWNLOAD
    language_server_id: str = LANGUAGE_SERVER_ID
    log_level: str = "INFO"

    @property
    def binary_path(self) -> str:
        # Keeps the leading "." so a relative path is never looked up on PATH
        return os.path.join(str(self.binary_dir), self.binary_name)

"""Cambridge language server extension package."""

from cambridge_extension.types import (
    Architecture,
    Command,
    DownloadedFileType,
    ExtensionConfig,
    InstallationStatus,
    Os,
    PlatformKey,
    ResolveStrategy,
)
from cambridge_extension.errors import (
    ExtensionError,
    UnsupportedPlatformError,
    DownloadFailedError,
    MakeExecutableError,
    BinaryNotFoundError,
)
from cambridge_extension.host import Host, LocalHost
from cambridge_extension.resolver import BinaryResolver
from cambridge_extension.config import load_config

__all__ = [
    "Architecture",
    "Command",
    "DownloadedFileType",
    "ExtensionConfig",
    "InstallationStatus",
    "Os",
    "PlatformKey",
    "ResolveStrategy",
    "ExtensionError",
    "UnsupportedPlatformError",
    "DownloadFailedError",
    "MakeExecutableError",
    "BinaryNotFoundError",
    "Host",
    "LocalHost",
    "BinaryResolver",
    "load_config",
]

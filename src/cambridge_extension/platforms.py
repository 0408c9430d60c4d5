"""Platform detection and release asset mapping."""
import platform
from typing import Dict, Optional, Tuple

from cambridge_extension.constants import (
    RELEASES_BASE,
    RELEASE_VERSION,
    RELEASE_URL_TEMPLATE,
    RELEASE_ASSETS,
)
from cambridge_extension.errors import UnsupportedPlatformError
from cambridge_extension.types import Architecture, Os, PlatformKey

# platform.system() values
OS_MAPPINGS = {
    "Darwin": Os.MAC,
    "Linux": Os.LINUX,
    "Windows": Os.WINDOWS,
}

# platform.machine() values, lowercased
ARCH_MAPPINGS = {
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
    "x86_64": Architecture.X8664,
    "amd64": Architecture.X8664,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
}


def release_url(asset_key: str, version: str = RELEASE_VERSION) -> str:
    """Build the download URL for a release asset."""
    return RELEASE_URL_TEMPLATE.format(
        base=RELEASES_BASE,
        version=version,
        asset=RELEASE_ASSETS[asset_key],
    )


# A None architecture matches any architecture for that OS
DOWNLOAD_URLS: Dict[Tuple[Os, Optional[Architecture]], str] = {
    (Os.MAC, Architecture.AARCH64): release_url("macos-arm64"),
    (Os.MAC, Architecture.X8664): release_url("macos-intel"),
    (Os.LINUX, None): release_url("linux"),
    (Os.WINDOWS, None): release_url("windows"),
}


def current_platform() -> PlatformKey:
    """Get current platform information."""
    system = platform.system()
    machine = platform.machine().lower()

    if system not in OS_MAPPINGS:
        raise UnsupportedPlatformError(system.lower(), machine)

    # Unknown machines still match architecture-independent assets
    arch = ARCH_MAPPINGS.get(machine, Architecture.OTHER)
    return PlatformKey(os=OS_MAPPINGS[system], arch=arch)


def get_download_url(key: PlatformKey) -> str:
    """Look up the release asset URL for a platform.

    An exact (os, arch) entry wins; otherwise an architecture-independent
    entry for the OS is used.
    """
    url = DOWNLOAD_URLS.get((key.os, key.arch)) or DOWNLOAD_URLS.get((key.os, None))
    if url is None:
        raise UnsupportedPlatformError(key.os.name.lower(), key.arch.name.lower())
    return url


def is_platform_supported(key: PlatformKey) -> bool:
    """Check if a release asset exists for the platform."""
    try:
        get_download_url(key)
        return True
    except UnsupportedPlatformError:
        return False

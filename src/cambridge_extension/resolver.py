"""Language server binary resolution."""

from typing import Optional

from cambridge_extension.errors import BinaryNotFoundError, DownloadFailedError
from cambridge_extension.host import Host
from cambridge_extension.logging import get_logger
from cambridge_extension.platforms import get_download_url
from cambridge_extension.types import (
    Command,
    DownloadTarget,
    DownloadedFileType,
    ExtensionConfig,
    InstallationStatus,
    ResolveStrategy,
)
from cambridge_extension.utils.fs import is_regular_file

logger = get_logger(__name__)


class BinaryResolver:
    """Finds or fetches the language server binary for one extension instance.

    Resolution order:
    1. The path cached by a previous call, if the file is still there
    2. Per ``config.strategy``: the host search path, or the release asset
       for the host platform (downloaded once, then reused from disk)

    Errors propagate to the caller; the cache is only written on success.
    """

    def __init__(self, host: Host, config: Optional[ExtensionConfig] = None) -> None:
        self.host = host
        self.config = config or ExtensionConfig()
        self.cached_binary_path: Optional[str] = None

    async def resolve(self, language_server_id: Optional[str] = None) -> str:
        """Return a path to an executable language server binary.

        Raises:
            UnsupportedPlatformError: No release asset for the host platform
            DownloadFailedError: The asset could not be fetched
            MakeExecutableError: The fetched file could not be chmod-ed
            BinaryNotFoundError: Search-path strategy and the binary is absent
        """
        server_id = language_server_id or self.config.language_server_id

        if self.cached_binary_path is not None:
            if is_regular_file(self.cached_binary_path):
                return self.cached_binary_path
            logger.debug({"event": "stale_cached_binary", "path": self.cached_binary_path})

        if self.config.strategy == ResolveStrategy.SEARCH_PATH:
            path = self._resolve_from_search_path()
        else:
            path = await self._resolve_from_release(server_id)

        self.cached_binary_path = path
        return path

    async def language_server_command(self, language_server_id: Optional[str] = None) -> Command:
        """Build the command the host spawns. No args or env are set."""
        return Command(command=await self.resolve(language_server_id))

    def _resolve_from_search_path(self) -> str:
        path = self.host.which(self.config.binary_name)
        if not path:
            raise BinaryNotFoundError(self.config.binary_name)

        logger.info({"event": "binary_found_on_path", "path": path})
        return path

    async def _resolve_from_release(self, server_id: str) -> str:
        self.host.set_installation_status(server_id, InstallationStatus.CHECKING_FOR_UPDATE)

        binary_path = self.config.binary_path
        if not is_regular_file(binary_path):
            self.host.set_installation_status(server_id, InstallationStatus.DOWNLOADING)

            target = DownloadTarget(
                url=get_download_url(self.host.current_platform()),
                dest=binary_path,
            )
            try:
                await self.host.download_file(target.url, target.dest, DownloadedFileType.UNCOMPRESSED)
            except Exception as e:
                logger.error({"event": "binary_download_failed", "url": target.url, "error": str(e)})
                raise DownloadFailedError(target.url, e) from e

            self.host.make_file_executable(target.dest)
            logger.info({"event": "binary_downloaded", "url": target.url, "path": target.dest})

        self.host.set_installation_status(server_id, InstallationStatus.NONE)
        return binary_path

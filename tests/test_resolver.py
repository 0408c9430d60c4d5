"""Tests for language server binary resolution."""

import pytest

from cambridge_extension.errors import (
    BinaryNotFoundError,
    DownloadFailedError,
    MakeExecutableError,
    UnsupportedPlatformError,
)
from cambridge_extension.resolver import BinaryResolver
from cambridge_extension.types import (
    Architecture,
    DownloadedFileType,
    ExtensionConfig,
    InstallationStatus,
    Os,
    PlatformKey,
    ResolveStrategy,
)


@pytest.mark.asyncio
async def test_cold_download(host, config):
    """Missing binary is downloaded, chmod-ed and cached."""
    resolver = BinaryResolver(host, config)

    path = await resolver.resolve()

    assert path == config.binary_path
    assert resolver.cached_binary_path == path
    assert host.downloads == [(
        "https://github.com/andrinoff/cambridge-lang/releases/download/v0.1.0/cambridge-lsp-linux",
        path,
        DownloadedFileType.UNCOMPRESSED,
    )]
    assert host.executables == [path]


@pytest.mark.asyncio
async def test_cold_download_status_sequence(host, config):
    resolver = BinaryResolver(host, config)
    await resolver.resolve()

    assert host.status_history == [
        InstallationStatus.CHECKING_FOR_UPDATE,
        InstallationStatus.DOWNLOADING,
        InstallationStatus.NONE,
    ]


@pytest.mark.asyncio
async def test_existing_binary_skips_download(host, config):
    (config.binary_dir / config.binary_name).write_text("binary")
    resolver = BinaryResolver(host, config)

    path = await resolver.resolve()

    assert path == config.binary_path
    assert host.downloads == []
    assert host.executables == []
    assert host.status_history == [InstallationStatus.CHECKING_FOR_UPDATE, InstallationStatus.NONE]


@pytest.mark.asyncio
async def test_cached_path_fast_path(host, config):
    resolver = BinaryResolver(host, config)
    await resolver.resolve()
    host.status_history.clear()

    path = await resolver.resolve()

    assert path == config.binary_path
    assert len(host.downloads) == 1
    assert host.status_history == []


@pytest.mark.asyncio
async def test_stale_cache_revalidated(host, config, tmp_path):
    stale = tmp_path / "gone"
    stale.write_text("x")
    resolver = BinaryResolver(host, config)
    resolver.cached_binary_path = str(stale)
    stale.unlink()

    path = await resolver.resolve()

    assert path != str(stale)
    assert path == config.binary_path
    assert len(host.downloads) == 1


@pytest.mark.asyncio
async def test_cache_pointing_at_directory_is_ignored(host, config, tmp_path):
    resolver = BinaryResolver(host, config)
    resolver.cached_binary_path = str(tmp_path)

    assert await resolver.resolve() == config.binary_path


@pytest.mark.asyncio
async def test_unsupported_platform(make_host, config):
    host = make_host(PlatformKey(Os.MAC, Architecture.X86))
    resolver = BinaryResolver(host, config)

    with pytest.raises(UnsupportedPlatformError, match="Unsupported platform"):
        await resolver.resolve()

    assert host.downloads == []
    assert resolver.cached_binary_path is None
    assert host.status_history == [InstallationStatus.CHECKING_FOR_UPDATE, InstallationStatus.DOWNLOADING]


@pytest.mark.asyncio
async def test_download_failure_wrapped(host, config):
    cause = ConnectionError("connection reset")
    host.download_error = cause
    resolver = BinaryResolver(host, config)

    with pytest.raises(DownloadFailedError, match="Failed to download LSP: connection reset") as exc_info:
        await resolver.resolve()

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.details["url"].endswith("/cambridge-lsp-linux")
    assert resolver.cached_binary_path is None
    assert InstallationStatus.NONE not in host.status_history


@pytest.mark.asyncio
async def test_make_executable_failure_propagates(host, config):
    error = MakeExecutableError("./cambridge-lsp", "Operation not permitted")
    host.chmod_error = error
    resolver = BinaryResolver(host, config)

    with pytest.raises(MakeExecutableError) as exc_info:
        await resolver.resolve()

    assert exc_info.value is error
    assert resolver.cached_binary_path is None


@pytest.mark.asyncio
async def test_retry_after_failure_starts_fresh(host, config):
    host.download_error = ConnectionError("offline")
    resolver = BinaryResolver(host, config)
    with pytest.raises(DownloadFailedError):
        await resolver.resolve()

    host.download_error = None
    host.status_history.clear()

    assert await resolver.resolve() == config.binary_path
    assert host.status_history[0] == InstallationStatus.CHECKING_FOR_UPDATE


@pytest.mark.asyncio
async def test_search_path_found(host, tmp_path):
    binary = tmp_path / "cambridge-lsp"
    binary.write_text("binary")
    host.path_entries["cambridge-lsp"] = str(binary)
    resolver = BinaryResolver(host, ExtensionConfig(strategy=ResolveStrategy.SEARCH_PATH))

    path = await resolver.resolve()

    assert path == str(binary)
    assert resolver.cached_binary_path == str(binary)
    assert host.downloads == []
    assert host.status_history == []


@pytest.mark.asyncio
async def test_search_path_returns_exact_lookup(host):
    host.path_entries["cambridge-lsp"] = "/usr/local/bin/cambridge-lsp"
    resolver = BinaryResolver(host, ExtensionConfig(strategy=ResolveStrategy.SEARCH_PATH))

    assert await resolver.resolve() == "/usr/local/bin/cambridge-lsp"
    assert resolver.cached_binary_path == "/usr/local/bin/cambridge-lsp"


@pytest.mark.asyncio
async def test_search_path_missing(host):
    resolver = BinaryResolver(host, ExtensionConfig(strategy=ResolveStrategy.SEARCH_PATH))

    with pytest.raises(BinaryNotFoundError, match="build it .* add it to your PATH"):
        await resolver.resolve()

    assert resolver.cached_binary_path is None
    assert host.downloads == []
    assert host.status_history == []


@pytest.mark.asyncio
async def test_language_server_command(host, config):
    resolver = BinaryResolver(host, config)

    command = await resolver.language_server_command()

    assert command.command == config.binary_path
    assert command.args == []
    assert command.env == {}
    assert command.to_dict() == {"command": config.binary_path, "args": [], "env": {}}


def test_default_binary_path_is_explicitly_relative():
    assert ExtensionConfig().binary_path == "./cambridge-lsp"

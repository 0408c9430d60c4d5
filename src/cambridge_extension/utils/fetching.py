import gzip
import os
import shutil
import tarfile
import zipfile
from pathlib import Path

import aiohttp

from cambridge_extension.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 8192
PARTIAL_SUFFIX = ".part"


async def download_url(url: str, dest: Path) -> int:
    """Stream a URL to a file, returning the number of bytes written.

    Data lands in a ".part" sibling that replaces dest only once the body is
    complete, so an interrupted download never leaves a truncated dest.
    """
    partial = dest.with_name(dest.name + PARTIAL_SUFFIX)
    written = 0
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url) as response:
                response.raise_for_status()

                with open(partial, "wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)

        os.replace(partial, dest)
    finally:
        if partial.exists():
            partial.unlink()

    logger.debug({"event": "url_downloaded", "url": url, "dest": str(dest), "size": written})
    return written


def gunzip_file(src: Path, dest: Path) -> Path:
    """Decompress a single gzip file."""
    with gzip.open(src, "rb") as fin, open(dest, "wb") as fout:
        shutil.copyfileobj(fin, fout)
    return dest


def extract_archive(archive_path: Path, dest_dir: Path) -> Path:
    """Extract a zip or tarball into dest_dir."""

    logger.debug(
        {"event": "extract_archive", "archive": str(archive_path), "dest": str(dest_dir)}
    )
    format = (
        "".join(archive_path.suffixes[-2:])
        if len(archive_path.suffixes) > 1
        else archive_path.suffix
    )

    archive_handlers = {
        ".zip": zipfile.ZipFile,
        ".tar.gz": tarfile.open,
        ".tgz": tarfile.open,
    }

    handler = archive_handlers.get(format)
    if not handler:
        raise ValueError(f"Unsupported archive format: {format}")

    dest_dir.mkdir(parents=True, exist_ok=True)
    with handler(archive_path) as archive:
        if isinstance(archive, tarfile.TarFile):
            archive.extractall(dest_dir, filter="data")
        else:
            archive.extractall(dest_dir)

    logger.info(
        {
            "event": "archive_extracted",
            "archive": str(archive_path),
            "extracted_to": str(dest_dir),
        }
    )

    return dest_dir

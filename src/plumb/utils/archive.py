"""Download and unpack pre-built plugin release bundles."""

import io
import logging
import os
import zipfile
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when a release bundle cannot be downloaded or unpacked."""


def download(
    url: str,
    timeout: float = 60.0,
    transport: httpx.BaseTransport | None = None,
) -> bytes:
    """Fetch ``url`` and return the response body.

    Args:
        url: Release bundle URL. Redirects are followed.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).

    Raises:
        ArchiveError: On connection failures or non-2xx responses.
    """
    logger.info(f"Downloading {url}")
    try:
        with httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": "plumb"},
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPError as e:
        raise ArchiveError(f"Failed to download {url}: {e}") from e


def unpack(data: bytes, destination: Path) -> list[Path]:
    """Extract a zip archive into ``destination``.

    Unix permission bits stored in the archive are restored so bundled
    executables keep their executable bit.

    Returns:
        Paths of the extracted files.

    Raises:
        ArchiveError: If the data is not a zip archive, an entry is corrupt
            or an entry would be written outside ``destination``.
    """
    destination = Path(destination)
    root = destination.resolve()
    extracted: list[Path] = []

    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Release bundle is not a zip archive: {e}") from e

    with archive:
        for info in archive.infolist():
            target = (root / info.filename).resolve()
            if target != root and root not in target.parents:
                raise ArchiveError(f"Archive entry escapes destination: {info.filename}")

        destination.mkdir(parents=True, exist_ok=True)
        for info in archive.infolist():
            try:
                path = Path(archive.extract(info, root))
            except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError) as e:
                raise ArchiveError(f"Corrupt release bundle entry {info.filename}: {e}") from e
            mode = (info.external_attr >> 16) & 0o777
            if mode and not info.is_dir():
                os.chmod(path, mode)
            if not info.is_dir():
                extracted.append(path)

    logger.debug(f"Unpacked {len(extracted)} file(s) into {destination}")
    return extracted

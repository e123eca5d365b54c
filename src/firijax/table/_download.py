"""Download the published FIRI model tables.

Provides helpers to fetch the ``firi.tar.gz`` archive holding the FIRI-2018
CSV table and to unpack the CSV files from it.  Network errors are
propagated to the caller so that higher-level code (e.g.
:func:`load_firi`) can decide on fallback behaviour.

The FIRI-2018 data are distributed under a CC BY 4.0 license; see
Friedrich et al. (2018) for attribution.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

import httpx

from firijax.utils.caching import file_hash

logger = logging.getLogger(__name__)

FIRI_URL: str = "https://ndownloader.figshare.com/files/26640602?private_link=33a146841a3f74a74590"
"""Default URL for the FIRI table archive (CSV conversion of the FIRI-2018 xlsx)."""

_ARCHIVE_FILENAME: str = "firi.tar.gz"
"""Canonical filename used for the cached archive."""

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""


def download_firi_archive(
    filepath: str | Path,
    *,
    url: str = FIRI_URL,
    timeout: float = _DEFAULT_TIMEOUT,
    sha256: str | None = None,
) -> Path:
    """Download the FIRI table archive to *filepath*.

    Creates parent directories if they do not exist.  On success the
    downloaded bytes are written to *filepath* and the resolved path is
    returned.

    Args:
        filepath: Destination path for the downloaded archive.
        url: URL to fetch.  Defaults to :data:`FIRI_URL`.
        timeout: HTTP timeout in seconds.  Defaults to 120.
        sha256: Expected hex digest of the archive.  When given, a mismatch
            removes the file and raises.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
        ValueError: If *sha256* is given and does not match.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Downloading FIRI tables from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    filepath.write_bytes(response.content)

    if sha256 is not None:
        digest = file_hash(filepath, "sha256")
        if digest != sha256.lower():
            filepath.unlink()
            raise ValueError(f"Checksum mismatch for {url}: expected {sha256}, got {digest}")

    logger.info("FIRI tables written to %s", filepath)
    return filepath.resolve()


def extract_firi_csv(archive: str | Path, directory: str | Path) -> list[Path]:
    """Unpack the CSV tables of a FIRI archive into *directory*.

    Only regular ``.csv`` members are extracted, flattened into
    *directory* by file name.

    Args:
        archive: Path to a ``.tar.gz`` FIRI archive.
        directory: Destination directory, created if needed.

    Returns:
        Paths of the extracted CSV files, sorted by name.

    Raises:
        FileNotFoundError: If *archive* does not exist.
        ValueError: If the archive holds no CSV table.
    """
    archive = Path(archive)
    if not archive.exists():
        raise FileNotFoundError(f"FIRI archive not found: {archive}")
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    with tarfile.open(archive, "r:gz") as tar:
        for member in tar.getmembers():
            name = Path(member.name).name
            if not member.isfile() or not name.endswith(".csv"):
                continue
            f = tar.extractfile(member)
            if f is None:
                continue
            dest = directory / name
            dest.write_bytes(f.read())
            written.append(dest)

    if not written:
        raise ValueError(f"No CSV tables found in FIRI archive {archive}")
    return sorted(written)

"""Factory functions for loading FIRI model tables.

Provides convenience functions for building :class:`FIRITable` instances:

- :func:`load_firi_from_file`: Load from an arbitrary CSV file.
- :func:`load_firi`: Load from the local cache, downloading the published
  tables the first time.
- :func:`available_models`: List the model tables present in the cache.
"""

from __future__ import annotations

import logging
from pathlib import Path

from firijax.table._download import (
    _ARCHIVE_FILENAME,
    FIRI_URL,
    download_firi_archive,
    extract_firi_csv,
)
from firijax.table._parsers import parse_firi_csv
from firijax.table._types import FIRITable, table_from_arrays
from firijax.utils.caching import get_models_cache_dir

logger = logging.getLogger(__name__)

DEFAULT_MODEL: str = "firi2018"
"""Name of the model table loaded by default."""


def load_firi_from_file(filepath: str | Path) -> FIRITable:
    """Load a FIRI model table from a local CSV file.

    Args:
        filepath: Path to a FIRI CSV file (e.g. ``firi2018.csv``).

    Returns:
        The validated model table.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a FIRI table.

    Examples:
        ```python
        from firijax.table import load_firi_from_file
        table = load_firi_from_file("/path/to/firi2018.csv")
        print(table.data.shape)
        ```
    """
    return table_from_arrays(**parse_firi_csv(filepath))


def load_firi(
    filepath: str | Path | None = None,
    *,
    model: str = DEFAULT_MODEL,
    url: str = FIRI_URL,
) -> FIRITable:
    """Load a FIRI model table, downloading the published tables if needed.

    When *filepath* is given the table is read from it directly.  Otherwise
    ``<cache_dir>/models/<model>.csv`` is used; if it is missing, the
    archive is downloaded from *url* and unpacked into the cache.  The
    published tables never change, so an existing cached file is always
    reused.

    Args:
        filepath: Explicit path to a FIRI CSV file.
        model: Model table name, used when *filepath* is ``None``.
        url: Archive URL used when the table is not cached.

    Returns:
        The validated model table.

    Raises:
        RuntimeError: If the download fails and no cached table exists.
        ValueError: If the downloaded archive does not contain *model*.

    Examples:
        ```python
        from firijax.table import load_firi
        table = load_firi()
        print(table.n_profiles)  # 1980
        ```
    """
    if filepath is not None:
        return load_firi_from_file(filepath)

    cache_dir = get_models_cache_dir()
    csv_path = cache_dir / f"{model}.csv"

    if not csv_path.exists():
        archive = cache_dir / _ARCHIVE_FILENAME
        try:
            download_firi_archive(archive, url=url)
            extract_firi_csv(archive, cache_dir)
        except Exception as exc:
            logger.error(
                "Failed to download FIRI tables and no cached table exists.",
                exc_info=True,
            )
            raise RuntimeError(
                f"Failed to download FIRI tables and no cached table exists at "
                f"{csv_path}. Check your network connection."
            ) from exc

        if not csv_path.exists():
            raise ValueError(
                f"Model {model!r} is not in the FIRI archive. "
                f"Available: {available_models(cache_dir)}"
            )

    return load_firi_from_file(csv_path)


def available_models(directory: str | Path | None = None) -> list[str]:
    """Return the names of the model tables found in *directory*.

    Args:
        directory: Directory to scan.  Defaults to the model cache.

    Returns:
        Sorted CSV file stems, e.g. ``["firi2018"]``.
    """
    directory = get_models_cache_dir() if directory is None else Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob("*.csv"))

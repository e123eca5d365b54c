"""Location of downloaded FIRI tables and checksums of cached files.

Downloaded archives and the model CSV files extracted from them are kept
under a single cache root: ``$FIRIJAX_CACHE`` when that variable is set,
``~/.cache/firijax`` otherwise.  The published tables never change, so a
cached file is reused for as long as it exists.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

_ENV_VAR = "FIRIJAX_CACHE"
_MODELS_SUBDIR = "models"


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return the firijax cache root, or a directory below it.

    The directory is created if it does not exist yet.

    Args:
        subdirectory: Relative path below the cache root, e.g. ``"models"``.

    Returns:
        Path to the directory.
    """
    root = os.environ.get(_ENV_VAR)
    path = Path(root) if root is not None else Path.home() / ".cache" / "firijax"
    if subdirectory:
        path = path.joinpath(subdirectory)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_models_cache_dir() -> Path:
    """Directory holding the FIRI archive and its extracted model tables."""
    return get_cache_dir(_MODELS_SUBDIR)


def file_hash(filepath: str | Path, algorithm: str = "sha256") -> str:
    """Return the hex digest of a downloaded file.

    Args:
        filepath: File to hash.
        algorithm: Any algorithm name :mod:`hashlib` knows.

    Returns:
        Lowercase hex digest.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
        ValueError: If *algorithm* is unknown.
    """
    if algorithm not in hashlib.algorithms_available:
        raise ValueError(f"Unsupported hash algorithm: '{algorithm}'")
    with open(filepath, "rb") as f:
        return hashlib.file_digest(f, algorithm).hexdigest()

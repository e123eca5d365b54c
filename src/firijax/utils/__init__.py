"""Cache directory and checksum helpers for downloaded model tables."""

from firijax.utils.caching import file_hash, get_cache_dir, get_models_cache_dir

__all__ = [
    "file_hash",
    "get_cache_dir",
    "get_models_cache_dir",
]

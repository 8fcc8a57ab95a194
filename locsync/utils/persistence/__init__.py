"""Persistence utilities sub-package.

Contains file I/O helpers and the translation cache path layout.
"""
from .file_utils import (
    ensure_dir,
    load_json,
    write_bytes,
    write_json_atomic,
    file_sha256,
)
from .cache_paths import (
    get_base_cache_dir,
    CachePaths,
)

__all__ = [
    # file_utils
    'ensure_dir',
    'load_json',
    'write_bytes',
    'write_json_atomic',
    'file_sha256',
    # cache_paths
    'get_base_cache_dir',
    'CachePaths',
]

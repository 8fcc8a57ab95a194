"""Utility modules for locsync.

Sub-packages:
- persistence/ — file I/O and translation cache paths
- display/ — status table and console output helpers

The config loader depends on the models package and is imported from
:mod:`locsync.utils.config_loader` directly.
"""

from .persistence.file_utils import ensure_dir, load_json
from .persistence.cache_paths import CachePaths, get_base_cache_dir
from .logger import get_logger, setup_logging
from .file_types import detect_file_type
from .prefix import clean_prefix, remote_path_for, default_push_prefix
from .pull_paths import render_pull_path
from .worker_pool import run_parallel

__all__ = [
    'ensure_dir',
    'load_json',
    'CachePaths',
    'get_base_cache_dir',
    'get_logger',
    'setup_logging',
    'detect_file_type',
    'clean_prefix',
    'remote_path_for',
    'default_push_prefix',
    'render_pull_path',
    'run_parallel',
]

"""Translation cache path utilities.

All cache-related file paths are constructed here so the cache layout
lives in a single place.
"""
import os
from pathlib import Path

CACHE_DIR_ENV = "LOCSYNC_CACHE_DIR"


def get_base_cache_dir() -> str:
    """Get absolute path to the translation cache directory.

    ``$LOCSYNC_CACHE_DIR`` wins when set; otherwise the cache lives under
    ``$XDG_CACHE_HOME/locsync`` (``~/.cache/locsync`` by default) so it
    survives between runs.

    Returns:
        Absolute path to the cache directory
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return str(Path(override).expanduser().resolve())

    xdg = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return str(base / "locsync")


class CachePaths:
    """Path layout for cache entries.

    Entries are sharded by the first two characters of their key to keep
    directories small.

    Example:
        >>> paths = CachePaths("/tmp/cache")
        >>> paths.get_entry_path("ab12cd")
        '/tmp/cache/translations/ab/ab12cd.json'
    """

    def __init__(self, base_dir: str = None):
        """Initialize cache paths.

        Args:
            base_dir: Optional base directory (defaults to the user cache dir)
        """
        self.base_dir = base_dir or get_base_cache_dir()

    def get_translations_directory(self) -> str:
        """Get path to the directory holding every cache entry."""
        return os.path.join(self.base_dir, "translations")

    def get_entry_path(self, key: str) -> str:
        """Get path to the JSON document for a cache key.

        Args:
            key: Hex cache key

        Returns:
            Full path to ``translations/<key[:2]>/<key>.json``
        """
        return os.path.join(self.get_translations_directory(), key[:2], f"{key}.json")

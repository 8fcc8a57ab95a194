"""
Translation service synchronization package.

- :mod:`client`      — primitive calls against the remote file API
- :mod:`temp_upload` — disposable uploads for comparing local content
- :mod:`cache`       — persistent cache of retrieved translations
- :mod:`sync_engine` — status, pull and push orchestration
"""
from .client import TranslationClient
from .temp_upload import TempUploadAdapter
from .cache import TranslationCache, CacheResult
from .sync_engine import ProjectSyncEngine

__all__ = [
    'TranslationClient',
    'TempUploadAdapter',
    'TranslationCache',
    'CacheResult',
    'ProjectSyncEngine',
]

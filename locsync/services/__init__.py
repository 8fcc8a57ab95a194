"""
Remote service packages for locsync.

- translation/ - translation service client, temp uploads, cache and
  the project sync engine
"""
from .translation import ProjectSyncEngine, TranslationCache, TranslationClient

__all__ = [
    'ProjectSyncEngine',
    'TranslationCache',
    'TranslationClient',
]

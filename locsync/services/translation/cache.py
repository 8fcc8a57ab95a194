"""
Translation cache — persistent store of retrieved translations.

Cache key = SHA-256 of (locale, absolute local path, file type, parser
config, SHA-256 of the local file content). Each entry is one JSON
document under the cache directory, written atomically.

Invalidation:
    * editing the source file changes its content hash, so old entries
      are never hit again;
    * entries older than ``max_age_hours`` count as misses, because the
      remote translations keep progressing (``0`` keeps entries forever).
"""
import base64
import binascii
import hashlib
import json
import os
import shutil
import time
from typing import Any, Callable, Dict, Optional

from ...models.project import DEFAULT_CACHE_MAX_AGE_HOURS
from ...utils.logger import get_logger
from ...utils.persistence.cache_paths import CachePaths
from ...utils.persistence.file_utils import file_sha256, load_json, write_json_atomic
from ...utils.worker_pool import KeyedLocks

log = get_logger(__name__)

ENTRY_VERSION = 1

Fetcher = Callable[[str, str, str, Dict[str, Any]], bytes]


class CacheResult:
    """Payload returned by :meth:`TranslationCache.get` plus the hit flag."""

    def __init__(self, hit: bool, payload: bytes, key: str = ""):
        self.hit = hit
        self.payload = payload
        self.key = key

    def __iter__(self):
        # allows ``hit, payload = cache.get(...)``
        return iter((self.hit, self.payload))

    def __repr__(self):
        return f"CacheResult(hit={self.hit}, bytes={len(self.payload)})"


class TranslationCache:
    """Read-through cache of translated file payloads.

    Args:
        fetch: Callable ``fetch(locale, local_path, file_type, parser_config)``
            returning the freshly retrieved translation bytes
        paths: Cache directory layout (defaults to the user cache dir)
        max_age_hours: Entry lifetime; ``0`` disables expiry
        clock: Time source, overridable in tests
    """

    def __init__(self, fetch: Fetcher, paths: Optional[CachePaths] = None,
                 max_age_hours=DEFAULT_CACHE_MAX_AGE_HOURS, clock=time.time):
        self.fetch = fetch
        self.paths = paths or CachePaths()
        self.max_age_seconds = max_age_hours * 3600
        self.clock = clock
        self._key_locks = KeyedLocks()

    # ── Keys and entries ───────────────────────────────────────────────

    @staticmethod
    def make_key(locale, local_path, file_type, parser_config, content_sha256) -> str:
        raw = json.dumps(
            [locale, os.path.abspath(local_path), file_type, parser_config or {}, content_sha256],
            sort_keys=True, separators=(',', ':'),
        )
        return hashlib.sha256(raw.encode('utf-8')).hexdigest()

    def _read_entry(self, key) -> Optional[bytes]:
        """Return the cached payload for *key*, or None on miss/expired/corrupt."""
        path = self.paths.get_entry_path(key)
        entry = load_json(path, default=None)
        if not isinstance(entry, dict) or entry.get("version") != ENTRY_VERSION:
            return None

        if self.max_age_seconds > 0:
            try:
                age = self.clock() - float(entry.get("created_utc_ts", 0))
            except (TypeError, ValueError):
                log.debug("Ignoring cache entry %s without a valid timestamp", key[:12])
                return None
            if age > self.max_age_seconds:
                log.debug("Cache entry %s expired (%.0fs old)", key[:12], age)
                return None

        try:
            return base64.b64decode(entry["payload_b64"], validate=True)
        except (KeyError, TypeError, binascii.Error) as e:
            log.debug("Ignoring corrupt cache entry %s: %s", key[:12], e)
            return None

    def _write_entry(self, key, payload, locale, local_path, file_type, parser_config, content_sha256):
        write_json_atomic(self.paths.get_entry_path(key), {
            "version": ENTRY_VERSION,
            "key": key,
            "locale": locale,
            "local_path": os.path.abspath(local_path),
            "file_type": file_type,
            "parser_config": parser_config or {},
            "content_sha256": content_sha256,
            "created_utc_ts": int(self.clock()),
            "payload_b64": base64.b64encode(payload).decode('ascii'),
        })

    # ── Public API ─────────────────────────────────────────────────────

    def get(self, locale, local_path, file_type, parser_config=None, refresh=False) -> CacheResult:
        """Return the translation of *local_path* into *locale*.

        On a miss the payload is fetched, stored, and then returned.
        Concurrent misses on the same key fetch once; the other callers
        wait and then read the stored entry.

        Args:
            locale: Locale identifier
            local_path: Source file path
            file_type: Remote file type
            parser_config: Parser directives used for the upload
            refresh: If True, skip the lookup and always fetch (the
                fresh payload still replaces the stored entry)

        Returns:
            :class:`CacheResult`

        Raises:
            OSError: If the source file cannot be read or the entry
                cannot be stored
            TranslationServiceError: If the fetch fails
        """
        content_sha256 = file_sha256(local_path)
        key = self.make_key(locale, local_path, file_type, parser_config, content_sha256)

        if not refresh:
            payload = self._read_entry(key)
            if payload is not None:
                return CacheResult(True, payload, key)

        with self._key_locks.hold(key):
            if not refresh:
                # another thread may have stored it while we waited
                payload = self._read_entry(key)
                if payload is not None:
                    return CacheResult(True, payload, key)

            log.debug("Cache miss for %s [%s]", local_path, locale)
            payload = self.fetch(locale, local_path, file_type, parser_config or {})
            self._write_entry(key, payload, locale, local_path, file_type, parser_config, content_sha256)

        return CacheResult(False, payload, key)

    def clear(self) -> None:
        """Remove every cache entry."""
        shutil.rmtree(self.paths.get_translations_directory(), ignore_errors=True)

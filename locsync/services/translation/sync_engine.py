"""
Project synchronization engine.

Provides :class:`ProjectSyncEngine`, which fans status queries, translation
retrieval and uploads out over the project's files and the service's
locales on a bounded worker pool.
"""
from typing import Callable, List, Optional

from ...exceptions import ConfigurationError, LocalIOError
from ...models.file_status import StatusMatrix
from ...models.project import check_unique_files
from ...models.sync_result import PullResult, UploadResult
from ...utils.logger import get_logger
from ...utils.persistence.file_utils import write_bytes
from ...utils.prefix import clean_prefix, remote_path_for
from ...utils.pull_paths import render_pull_path
from ...utils.worker_pool import run_parallel
from .cache import TranslationCache
from .temp_upload import TempUploadAdapter

log = get_logger(__name__)


class ProjectSyncEngine:
    """Orchestrates status, pull and push for one project.

    Args:
        config: :class:`~locsync.models.project.ProjectConfig`
        client: :class:`~locsync.services.translation.client.TranslationClient`
        temp_uploads: Temp-upload adapter (built from *client* if omitted)
        cache: Translation cache (built on the default cache dir if omitted)
        max_workers: Concurrency ceiling (defaults to ``config.max_workers``)
    """

    def __init__(self, config, client, temp_uploads: Optional[TempUploadAdapter] = None,
                 cache: Optional[TranslationCache] = None, max_workers: Optional[int] = None):
        self.config = config
        self.client = client
        self.temp_uploads = temp_uploads or TempUploadAdapter(client)
        self.cache = cache or TranslationCache(
            self.fetch_translation, max_age_hours=config.cache_max_age_hours
        )
        self.max_workers = max_workers or config.max_workers

    # ── Shared helpers ─────────────────────────────────────────────────

    def locales(self) -> List[str]:
        """Fetch the service's locale list (once per command)."""
        return self.client.locales()

    def _resolve(self, files, locales):
        files = list(self.config.files if files is None else files)
        check_unique_files(files)
        locales = list(self.locales() if locales is None else locales)
        return files, locales

    def fetch_translation(self, locale, local_path, file_type, parser_config) -> bytes:
        """Retrieve a fresh translation of the file's current content.

        Used by the cache on a miss.
        """
        temp_uri = self.temp_uploads.upload(local_path, file_type, parser_config)
        return self.client.get(temp_uri, locale)

    def cleanup(self) -> int:
        """Delete temp artifacts created during this command."""
        return self.temp_uploads.cleanup()

    # ── Status ─────────────────────────────────────────────────────────

    def compute_status(self, files=None, locales=None) -> StatusMatrix:
        """Build the (file × locale) status matrix for the local content.

        Each file is uploaded once as a temp artifact so the status
        reflects the current local content rather than the last push,
        then one status query per locale is run concurrently.

        Args:
            files: Project files (defaults to the configured list)
            locales: Locales (defaults to the service's list)

        Returns:
            :class:`StatusMatrix` with one entry per (file, locale) pair

        Raises:
            LocSyncError: On the first failing upload or status query
        """
        files, locales = self._resolve(files, locales)
        matrix = StatusMatrix()

        work_items = []
        for project_file in files:
            temp_uri = self.temp_uploads.upload(
                self.config.local_path(project_file),
                self.config.file_type_for(project_file),
                self.config.parser_config,
            )
            work_items.extend((project_file, temp_uri, locale) for locale in locales)

        def query(item):
            project_file, temp_uri, locale = item
            status = self.client.status(temp_uri, locale)
            matrix.set(project_file, locale, status)

        log.debug("Querying status for %d file(s) x %d locale(s)", len(files), len(locales))
        run_parallel(work_items, query, self.max_workers)
        return matrix

    # ── Pull ───────────────────────────────────────────────────────────

    def pull(self, files=None, locales=None, use_cache=True,
             callback: Optional[Callable[[PullResult], None]] = None) -> List[PullResult]:
        """Retrieve translations and write them to their local destinations.

        Destinations and file types are resolved for every pair before any
        work is dispatched, so configuration errors abort early. Pairs then
        run concurrently in no particular order; a failure leaves already
        written files in place.

        Args:
            files: Project files (defaults to the configured list)
            locales: Locales (defaults to the service's list)
            use_cache: If False, always fetch (entries are still refreshed)
            callback: Called with each :class:`PullResult` as it completes

        Returns:
            One :class:`PullResult` per (file, locale) pair
        """
        files, locales = self._resolve(files, locales)

        work_items = []
        for project_file in files:
            local_path = self.config.local_path(project_file)
            file_type = self.config.file_type_for(project_file)
            for locale in locales:
                destination = render_pull_path(
                    project_file, locale, self.config.pull_file_path, self.config.root
                )
                work_items.append((project_file, local_path, file_type, locale, destination))

        def pull_one(item):
            project_file, local_path, file_type, locale, destination = item
            try:
                cached = self.cache.get(
                    locale, local_path, file_type, self.config.parser_config, refresh=not use_cache
                )
                write_bytes(destination, cached.payload)
            except OSError as e:
                raise LocalIOError(f"Pulling {project_file} [{locale}] failed: {e}") from e
            result = PullResult(project_file, locale, destination, cached=cached.hit)
            if callback:
                callback(result)
            return result

        return run_parallel(work_items, pull_one, self.max_workers)

    # ── Push ───────────────────────────────────────────────────────────

    def push(self, files=None, prefix="", locales=None,
             callback: Optional[Callable[[UploadResult], None]] = None) -> List[UploadResult]:
        """Upload project files, retracting prefixed uploads with no new strings.

        Every file is uploaded to ``prefix + project path`` and the first
        locale's status is read back. Under a non-empty prefix an upload
        with zero strings awaiting authorization duplicated existing
        content and is deleted again. Un-prefixed uploads are never
        deleted.

        Args:
            files: Project files (defaults to the configured list)
            prefix: Remote namespace prefix ('' for the canonical namespace)
            locales: Locales (defaults to the service's list; only the
                first one is queried)
            callback: Called with each :class:`UploadResult` as it completes

        Returns:
            One :class:`UploadResult` per file
        """
        files, locales = self._resolve(files, locales)
        if not locales:
            raise ConfigurationError("The translation project has no locales configured")

        prefix = clean_prefix(prefix)
        first_locale = locales[0]

        work_items = [
            (project_file,
             self.config.local_path(project_file),
             self.config.file_type_for(project_file),
             remote_path_for(prefix, project_file))
            for project_file in files
        ]

        def push_one(item):
            project_file, local_path, file_type, remote_path = item
            self.client.upload(local_path, remote_path, file_type, self.config.parser_config)
            status = self.client.status(remote_path, first_locale)

            retracted = False
            # only prefixed uploads are pruned; the canonical namespace persists
            if prefix and status.awaiting_authorization_count() == 0:
                log.debug("No new strings in %s, deleting it", remote_path)
                self.client.delete(remote_path)
                retracted = True

            result = UploadResult(project_file, remote_path, status, retracted=retracted)
            if callback:
                callback(result)
            return result

        return run_parallel(work_items, push_one, self.max_workers)

"""
Disposable uploads used to compare local content with the service.

The service has no "diff local file against remote" endpoint, so status
and translation lookups upload the file's current content under a
throw-away URI and query that instead. Swap this adapter out if a better
comparison primitive becomes available.
"""
import hashlib
import posixpath
import threading
from typing import Any, Dict, List

from ...utils.logger import get_logger
from ...utils.worker_pool import KeyedLocks
from ...exceptions import LocalIOError, TranslationServiceError

log = get_logger(__name__)

TEMP_NAMESPACE = "/_locsync_tmp"


class TempUploadAdapter:
    """Uploads local files as temporary remote artifacts.

    Artifacts are named after a hash of the file content, file type and
    parser config, so identical uploads within a run happen once. Every
    artifact created is remembered and removed by :meth:`cleanup`.

    Args:
        client: :class:`~locsync.services.translation.client.TranslationClient`
        namespace: Remote directory for temporary artifacts
    """

    def __init__(self, client, namespace=TEMP_NAMESPACE):
        self.client = client
        self.namespace = namespace
        self._uploaded: Dict[str, str] = {}
        self._order: List[str] = []
        self._lock = threading.Lock()
        self._key_locks = KeyedLocks()

    def temp_uri_for(self, local_path, file_type, parser_config: Dict[str, Any] = None) -> str:
        """Remote URI a temp upload of *local_path* would use."""
        digest = hashlib.sha1()
        with open(local_path, 'rb') as f:
            digest.update(f.read())
        digest.update(file_type.encode('utf-8'))
        digest.update(repr(sorted((parser_config or {}).items())).encode('utf-8'))
        return posixpath.join(self.namespace, digest.hexdigest(), posixpath.basename(local_path))

    def upload(self, local_path, file_type, parser_config: Dict[str, Any] = None) -> str:
        """Upload *local_path* as a temp artifact.

        Args:
            local_path: File to upload
            file_type: Remote file type
            parser_config: Extra parser directives

        Returns:
            Remote URI usable for status and retrieval queries

        Raises:
            LocalIOError: If the file cannot be read
            TranslationServiceError: If the upload fails
        """
        try:
            temp_uri = self.temp_uri_for(local_path, file_type, parser_config)
        except OSError as e:
            raise LocalIOError(f"Cannot read {local_path} for upload: {e}") from e

        with self._key_locks.hold(temp_uri):
            with self._lock:
                if temp_uri in self._uploaded:
                    return temp_uri

            log.debug("Uploading %s as temp file %s", local_path, temp_uri)
            self.client.upload(local_path, temp_uri, file_type, parser_config)

            with self._lock:
                self._uploaded[temp_uri] = local_path
                self._order.append(temp_uri)

        return temp_uri

    @property
    def uploaded(self) -> List[str]:
        """Temp URIs created so far, in upload order."""
        with self._lock:
            return list(self._order)

    def cleanup(self) -> int:
        """Delete every temp artifact created by this adapter.

        Failures are logged and skipped so cleanup never hides the error
        that ended the command.

        Returns:
            Number of artifacts deleted
        """
        with self._lock:
            pending = list(self._order)
            self._order.clear()
            self._uploaded.clear()

        deleted = 0
        for temp_uri in pending:
            try:
                self.client.delete(temp_uri)
                deleted += 1
            except TranslationServiceError as e:
                log.warning("Could not delete temp file %s: %s", temp_uri, e)

        if deleted:
            log.debug("Removed %d temp file(s)", deleted)
        return deleted

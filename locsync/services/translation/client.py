"""
Low-level translation service operations.

Thin wrapper around the service's v1 file API. Every call either returns
the decoded ``data`` section of the response envelope or raises
:class:`~locsync.exceptions.TranslationServiceError`.
"""
import os
from typing import Any, Dict, List, Optional

import requests

from ...exceptions import LocalIOError, TranslationServiceError
from ...models.file_status import FileStatus
from ...models.project import DEFAULT_API_URL, DEFAULT_TIMEOUT
from ...utils.logger import get_logger

log = get_logger(__name__)

SUCCESS_CODE = "SUCCESS"


def _form_value(value) -> str:
    """Render a parser directive the way the upload form expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TranslationClient:
    """Primitive operations against the remote translation service.

    Args:
        api_key: Service API key
        project_id: Service project identifier
        api_url: Base URL of the v1 API
        timeout: Per-request timeout in seconds
        session: Optional pre-built :class:`requests.Session`
    """

    def __init__(self, api_key, project_id, api_url=DEFAULT_API_URL,
                 timeout=DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.project_id = project_id
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config):
        """Build a client from a :class:`~locsync.models.project.ProjectConfig`."""
        return cls(
            api_key=config.api_key,
            project_id=config.project_id,
            api_url=config.api_url,
            timeout=config.timeout,
        )

    # ── Transport ──────────────────────────────────────────────────────

    def _request(self, method, path, params=None, data=None, files=None, raw=False):
        """Send one API request.

        Args:
            method: HTTP method
            path: API path (e.g. ``/file/status``)
            params: Query parameters
            data: Form fields
            files: Multipart file fields
            raw: If True, return the response body bytes on success
                instead of decoding the JSON envelope

        Returns:
            Envelope ``data`` (or raw bytes when *raw* is set)

        Raises:
            TranslationServiceError: On transport errors or a non-success envelope
        """
        url = f"{self.api_url}{path}"
        auth = {"apiKey": self.api_key, "projectId": self.project_id}
        if method == "GET":
            params = {**auth, **(params or {})}
        else:
            data = {**auth, **(data or {})}

        log.debug("%s %s params=%s", method, url, {k: v for k, v in (params or {}).items() if k != "apiKey"})

        try:
            response = self.session.request(
                method, url, params=params, data=data, files=files, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TranslationServiceError(f"{method} {path} failed: {e}") from e

        log.debug("%s %s -> HTTP %d", method, path, response.status_code)

        if raw and 200 <= response.status_code < 300:
            return response.content

        return self._decode_envelope(response, method, path)

    @staticmethod
    def _decode_envelope(response, method, path) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise TranslationServiceError(
                f"{method} {path} returned HTTP {response.status_code} with a non-JSON body"
            ) from e

        envelope = body.get("response") if isinstance(body, dict) else None
        if not isinstance(envelope, dict):
            raise TranslationServiceError(
                f"{method} {path} returned HTTP {response.status_code} without a response envelope"
            )
        code = envelope.get("code")
        if code != SUCCESS_CODE or not (200 <= response.status_code < 300):
            raise TranslationServiceError(
                f"{method} {path} failed with HTTP {response.status_code}",
                code=code or "UNKNOWN",
                messages=[str(m) for m in envelope.get("messages") or []],
            )

        data = envelope.get("data")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise TranslationServiceError(f"{method} {path} returned malformed data: {data!r}")
        return data

    # ── Operations ─────────────────────────────────────────────────────

    def locales(self) -> List[str]:
        """List the project's target locales.

        Returns:
            Locale identifiers in the order the service reports them
        """
        data = self._request("GET", "/project/locale/list")
        locales = []
        for entry in data.get("locales") or []:
            locale = entry.get("locale") if isinstance(entry, dict) else None
            if not locale:
                log.warning("Skipping malformed locale entry: %r", entry)
                continue
            locales.append(locale)
        return locales

    def upload(self, local_path, remote_path, file_type, parser_config: Dict[str, Any] = None):
        """Upload a local file to *remote_path*.

        Args:
            local_path: File to upload
            remote_path: Remote file URI
            file_type: Remote file type (e.g. ``json``)
            parser_config: Extra parser directives

        Returns:
            Upload summary as reported by the service
        """
        form = {
            "fileUri": remote_path,
            "fileType": file_type,
            "approved": "false",
        }
        for key, value in (parser_config or {}).items():
            form[f"smartling.{key}"] = _form_value(value)

        try:
            with open(local_path, 'rb') as f:
                files = {"file": (os.path.basename(local_path), f)}
                return self._request("POST", "/file/upload", data=form, files=files)
        except OSError as e:
            raise LocalIOError(f"Cannot read {local_path} for upload: {e}") from e

    def status(self, remote_path, locale) -> FileStatus:
        """Translation progress of a remote file for one locale."""
        data = self._request("GET", "/file/status", params={"fileUri": remote_path, "locale": locale})
        status = FileStatus.from_dict(data, locale=locale)
        if not status.file_uri:
            status.file_uri = remote_path
        return status

    def get(self, remote_path, locale) -> bytes:
        """Download the translated content of a remote file."""
        return self._request(
            "GET", "/file/get", params={"fileUri": remote_path, "locale": locale}, raw=True
        )

    def delete(self, remote_path):
        """Delete a remote file."""
        return self._request("POST", "/file/delete", data={"fileUri": remote_path})

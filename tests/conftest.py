"""Test configuration."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from locsync.exceptions import TranslationServiceError
from locsync.models.file_status import FileStatus
from locsync.models.project import ProjectConfig
from locsync.utils.persistence.cache_paths import CachePaths


class FakeTranslationClient:
    """In-memory stand-in for TranslationClient.

    Records every call; ``status_by_locale`` maps locale -> status payload
    and ``status_by_path`` (remote path -> payload) takes precedence.
    """

    def __init__(self, locales=None, status_by_locale=None, status_by_path=None):
        self._locales = list(["fr-FR", "de-DE"] if locales is None else locales)
        self.status_by_locale: Dict[str, Dict[str, Any]] = dict(status_by_locale or {})
        self.status_by_path: Dict[str, Dict[str, Any]] = dict(status_by_path or {})
        self.contents: Dict[str, bytes] = {}
        self.uploads: List[tuple] = []
        self.status_calls: List[tuple] = []
        self.get_calls: List[tuple] = []
        self.deletes: List[str] = []
        self.locale_calls = 0
        self.fail_on: Optional[str] = None
        self._lock = threading.Lock()

    def _maybe_fail(self, operation):
        if self.fail_on == operation:
            raise TranslationServiceError(f"{operation} failed", code="VALIDATION_ERROR")

    def locales(self):
        self.locale_calls += 1
        self._maybe_fail("locales")
        return list(self._locales)

    def upload(self, local_path, remote_path, file_type, parser_config=None):
        self._maybe_fail("upload")
        with open(local_path, "rb") as f:
            content = f.read()
        with self._lock:
            self.uploads.append((local_path, remote_path, file_type, dict(parser_config or {})))
            self.contents[remote_path] = content
        return {"overWritten": False, "stringCount": 3}

    def status(self, remote_path, locale):
        self._maybe_fail("status")
        with self._lock:
            self.status_calls.append((remote_path, locale))
        payload = self.status_by_path.get(remote_path) or self.status_by_locale.get(locale, {})
        return FileStatus.from_dict({"fileUri": remote_path, **payload}, locale=locale)

    def get(self, remote_path, locale):
        self._maybe_fail("get")
        with self._lock:
            self.get_calls.append((remote_path, locale))
            return f"[{locale}] ".encode("utf-8") + self.contents[remote_path]

    def delete(self, remote_path):
        self._maybe_fail("delete")
        with self._lock:
            self.deletes.append(remote_path)
            self.contents.pop(remote_path, None)


def status_payload(awaiting=0, in_progress=0, completed=0):
    """Status payload whose derived counts equal the arguments."""
    return {
        "stringCount": awaiting + in_progress + completed,
        "notAuthorizedStringCount": awaiting,
        "authorizedStringCount": in_progress,
        "completedStringCount": completed,
    }


@pytest.fixture
def fake_client() -> FakeTranslationClient:
    return FakeTranslationClient()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with two source files and a locsync.json."""
    root = tmp_path / "project"
    (root / "i18n").mkdir(parents=True)
    (root / "strings.json").write_text(json.dumps({"hello": "Hello"}))
    (root / "i18n" / "copy.json").write_text(json.dumps({"bye": "Goodbye"}))
    (root / "locsync.json").write_text(json.dumps({
        "api_key": "key-1234567890",
        "project_id": "proj-1",
        "files": ["strings.json", "i18n/copy.json"],
    }))
    return root


@pytest.fixture
def project_config(project_dir: Path) -> ProjectConfig:
    return ProjectConfig(
        root=str(project_dir),
        files=["strings.json", "i18n/copy.json"],
        api_key="key-1234567890",
        project_id="proj-1",
        max_workers=4,
    )


@pytest.fixture
def cache_paths(tmp_path: Path) -> CachePaths:
    return CachePaths(str(tmp_path / "cache"))


@pytest.fixture(autouse=True)
def isolated_cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the default cache directory inside the test's tmp dir."""
    monkeypatch.setenv("LOCSYNC_CACHE_DIR", str(tmp_path / "default-cache"))


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop the stderr handler a CLI run installs so it can't outlive the test."""
    yield
    root = logging.getLogger("locsync")
    for handler in list(root.handlers):
        if getattr(handler, "_locsync_cli", False):
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)

"""
Translation progress models: per-locale file status and the status matrix
"""
import threading
from typing import Dict, Optional

from ..exceptions import DuplicateStatusError


# Service payload fields summed into each derived count.
AWAITING_AUTHORIZATION_FIELDS = ("notAuthorizedStringCount", "awaitingAuthorizationStringCount")
IN_PROGRESS_FIELDS = ("authorizedStringCount", "inProgressStringCount")
COMPLETED_FIELD = "completedStringCount"


def _count(value) -> int:
    """Coerce a payload count to a non-negative integer."""
    try:
        number = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


class FileStatus:
    """
    Translation progress of one remote file for one locale.
    """

    def __init__(self, file_uri="", locale="", file_type="", string_count=0,
                 word_count=0, sub_states=None):
        """
        Initialize a FileStatus.

        Args:
            file_uri: Remote file URI the status belongs to
            locale: Locale identifier
            file_type: Remote file type
            string_count: Total number of strings in the file
            word_count: Total number of words in the file
            sub_states: Mapping of per-state string counts as reported
                by the service (e.g. ``authorizedStringCount``)
        """
        self.file_uri = file_uri
        self.locale = locale
        self.file_type = file_type
        self.string_count = _count(string_count)
        self.word_count = _count(word_count)
        self.sub_states = {k: _count(v) for k, v in (sub_states or {}).items()}

    def awaiting_authorization_count(self) -> int:
        """Strings uploaded but not yet authorized for translation."""
        return sum(self.sub_states.get(k, 0) for k in AWAITING_AUTHORIZATION_FIELDS)

    def in_progress_count(self) -> int:
        """Strings authorized and currently being translated."""
        return sum(self.sub_states.get(k, 0) for k in IN_PROGRESS_FIELDS)

    def completed_string_count(self) -> int:
        """Strings with a published translation."""
        return self.sub_states.get(COMPLETED_FIELD, 0)

    def format_counts(self) -> str:
        """Render the three counts as ``awaiting -> in progress -> completed``.

        Example:
            >>> FileStatus(sub_states={"notAuthorizedStringCount": 2,
            ...     "authorizedStringCount": 1, "completedStringCount": 5}).format_counts()
            '2 -> 1 -> 5'
        """
        return (f"{self.awaiting_authorization_count()} -> "
                f"{self.in_progress_count()} -> "
                f"{self.completed_string_count()}")

    def to_dict(self):
        """Serialize to the service payload shape"""
        data = {
            "fileUri": self.file_uri,
            "locale": self.locale,
            "fileType": self.file_type,
            "stringCount": self.string_count,
            "wordCount": self.word_count,
        }
        data.update(self.sub_states)
        return data

    @classmethod
    def from_dict(cls, data, locale=""):
        """Deserialize from a status payload"""
        sub_states = {
            k: data.get(k, 0)
            for k in AWAITING_AUTHORIZATION_FIELDS + IN_PROGRESS_FIELDS + (COMPLETED_FIELD,)
        }
        return cls(
            file_uri=data.get("fileUri", ""),
            locale=data.get("locale", locale),
            file_type=data.get("fileType", ""),
            string_count=data.get("stringCount", 0),
            word_count=data.get("wordCount", 0),
            sub_states=sub_states,
        )

    def __repr__(self):
        return f"FileStatus({self.file_uri!r}, {self.locale!r}, {self.format_counts()!r})"


class StatusMatrix:
    """
    Project file -> locale -> :class:`FileStatus`, filled concurrently.

    Each (file, locale) cell may be written exactly once; writers own
    disjoint keys so a single lock around each write is enough.
    """

    def __init__(self):
        self._cells: Dict[str, Dict[str, FileStatus]] = {}
        self._lock = threading.Lock()

    def set(self, project_file: str, locale: str, status: FileStatus):
        """
        Record the status of one (file, locale) pair.

        Args:
            project_file: Project-relative file path
            locale: Locale identifier
            status: Status snapshot

        Raises:
            DuplicateStatusError: If the cell was already written
        """
        with self._lock:
            row = self._cells.setdefault(project_file, {})
            if locale in row:
                raise DuplicateStatusError(
                    f"Status for {project_file} [{locale}] was already recorded"
                )
            row[locale] = status

    def get(self, project_file: str, locale: str) -> Optional[FileStatus]:
        """Return the status of one cell, or None if it was never written."""
        return self._cells.get(project_file, {}).get(locale)

    def row(self, project_file: str) -> Dict[str, FileStatus]:
        """Return a copy of every locale status recorded for a file."""
        return dict(self._cells.get(project_file, {}))

    def files(self):
        return list(self._cells)

    def __len__(self):
        return sum(len(row) for row in self._cells.values())

    def __contains__(self, key):
        project_file, locale = key
        return locale in self._cells.get(project_file, {})

"""
Exception hierarchy for locsync.

Every error raised by the sync engine is fatal for the running command;
handlers catch :class:`LocSyncError` once at the top of their workflow.
"""


class LocSyncError(Exception):
    """Base class for all locsync errors."""


class ConfigurationError(LocSyncError):
    """Project configuration is missing or cannot be resolved.

    Raised for a missing/invalid ``locsync.json``, an unresolvable file
    type, or a malformed pull path template.
    """


class TranslationServiceError(LocSyncError):
    """A call to the remote translation service failed."""

    def __init__(self, message, code=None, messages=None):
        super().__init__(message)
        self.code = code
        self.messages = messages or []

    def __str__(self):
        base = super().__str__()
        if self.code and self.messages:
            return f"{base} ({self.code}: {'; '.join(self.messages)})"
        if self.code:
            return f"{base} ({self.code})"
        return base


class DuplicateStatusError(LocSyncError):
    """A (file, locale) cell of the status matrix was written twice."""


class LocalIOError(LocSyncError):
    """Reading a source file or writing a pulled file failed."""

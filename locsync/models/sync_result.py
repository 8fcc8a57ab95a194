"""
Per-unit outcomes reported by the pull and push orchestrators
"""
from .file_status import FileStatus


class PullResult:
    """
    Outcome of pulling one project file for one locale.
    """

    def __init__(self, project_file, locale, destination, cached=False):
        """
        Initialize a PullResult.

        Args:
            project_file: Project-relative source path
            locale: Locale identifier
            destination: Local path the translation was written to
            cached: True if the payload came from the translation cache
        """
        self.project_file = project_file
        self.locale = locale
        self.destination = destination
        self.cached = cached

    def describe(self) -> str:
        """One-line report, e.g. ``locales/fr-FR/app.json (using cache)``."""
        if self.cached:
            return f"{self.destination} (using cache)"
        return self.destination


class UploadResult:
    """
    Outcome of pushing one project file.

    ``status`` is the first locale's status immediately after the upload;
    ``retracted`` is True when the upload added no new strings under a
    prefix and was deleted again.
    """

    def __init__(self, project_file, remote_path, status: FileStatus, retracted=False):
        self.project_file = project_file
        self.remote_path = remote_path
        self.status = status
        self.retracted = retracted

    @property
    def has_new_strings(self) -> bool:
        return not self.retracted

    def describe(self) -> str:
        """One-line report, e.g. `` 12 unauthorised strings in /feature-x/app.json``."""
        return "%3d unauthorised strings in %s" % (
            self.status.awaiting_authorization_count(), self.remote_path
        )

"""
Project configuration model for a locsync project
"""
import os
import posixpath
from typing import Any, Dict, List, Optional

from ..exceptions import ConfigurationError
from ..utils.file_types import detect_file_type


DEFAULT_API_URL = "https://api.smartling.com/v1"
DEFAULT_MAX_WORKERS = 8
DEFAULT_CACHE_MAX_AGE_HOURS = 24
DEFAULT_TIMEOUT = 60


def check_unique_files(files):
    """
    Reject a file list naming the same path twice.

    Paths are compared after normalization, so ``i18n/app.json`` and
    ``i18n/./app.json`` are the same file.

    Raises:
        ConfigurationError: Naming the first repeated path
    """
    seen = {}
    for project_file in files:
        key = posixpath.normpath(project_file.replace("\\", "/"))
        if key in seen:
            raise ConfigurationError(
                f"Project file {project_file!r} is listed more than once (as {seen[key]!r})"
            )
        seen[key] = project_file


class ProjectConfig:
    """
    Explicit configuration for one run of the sync engine.

    Built from ``locsync.json`` by :class:`~locsync.utils.config_loader.ConfigLoader`
    and passed to every orchestrator, so tests can use fixture configs
    without touching process-wide state.
    """

    def __init__(self, root, files, api_key="", project_id="", api_url=DEFAULT_API_URL,
                 file_type="", parser_config=None, pull_file_path="",
                 max_workers=DEFAULT_MAX_WORKERS,
                 cache_max_age_hours=DEFAULT_CACHE_MAX_AGE_HOURS,
                 timeout=DEFAULT_TIMEOUT, config_path=None):
        """
        Initialize a ProjectConfig.

        Args:
            root: Project root directory (the directory holding locsync.json)
            files: Ordered list of project-relative source paths
            api_key: Translation service API key
            project_id: Translation service project identifier
            api_url: Base URL of the translation service API
            file_type: Fallback file type when the extension is unknown
            parser_config: Extra parser directives sent with every upload
            pull_file_path: Template for pulled file destinations
            max_workers: Concurrency ceiling for remote calls
            cache_max_age_hours: Cache entry lifetime (0 keeps entries forever)
            timeout: HTTP timeout in seconds
            config_path: Path of the config file this was loaded from
        """
        self.root = os.path.abspath(root)
        self.files: List[str] = list(files)
        self.api_key = api_key
        self.project_id = project_id
        self.api_url = api_url or DEFAULT_API_URL
        self.file_type = file_type
        self.parser_config: Dict[str, Any] = {} if parser_config is None else parser_config
        self.pull_file_path = pull_file_path
        self.max_workers = max_workers
        self.cache_max_age_hours = cache_max_age_hours
        self.timeout = timeout
        self.config_path = config_path

    def validate(self):
        """
        Check the configuration is usable.

        Raises:
            ConfigurationError: Describing the first problem found
        """
        if not self.files:
            raise ConfigurationError("No project files configured (\"files\" is empty)")
        check_unique_files(self.files)
        if not isinstance(self.parser_config, dict):
            raise ConfigurationError("\"parser_config\" must be a JSON object")
        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ConfigurationError("\"max_workers\" must be a positive integer")
        if not isinstance(self.cache_max_age_hours, (int, float)) or self.cache_max_age_hours < 0:
            raise ConfigurationError("\"cache_max_age_hours\" must be zero or a positive number")

    def local_path(self, project_file: str) -> str:
        """Path of a project file relative to the current directory.

        Example:
            >>> cfg = ProjectConfig("/work/app", ["i18n/en.json"])
            >>> os.chdir("/work")
            >>> cfg.local_path("i18n/en.json")
            'app/i18n/en.json'
        """
        return os.path.relpath(os.path.join(self.root, project_file))

    def file_type_for(self, project_file: str) -> str:
        """Remote file type for a project file (see :func:`detect_file_type`)."""
        return detect_file_type(project_file, self.file_type)

    @classmethod
    def from_dict(cls, data, root, config_path: Optional[str] = None):
        """Deserialize from a locsync.json document"""
        return cls(
            root=root,
            files=data.get("files", []),
            api_key=data.get("api_key", ""),
            project_id=data.get("project_id", ""),
            api_url=data.get("api_url", DEFAULT_API_URL),
            file_type=data.get("file_type", ""),
            parser_config=data.get("parser_config", {}),
            pull_file_path=data.get("pull_file_path", ""),
            max_workers=data.get("max_workers", DEFAULT_MAX_WORKERS),
            cache_max_age_hours=data.get("cache_max_age_hours", DEFAULT_CACHE_MAX_AGE_HOURS),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            config_path=config_path,
        )

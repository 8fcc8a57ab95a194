"""Destination path rendering for pulled translations.

Templates use ``str.format`` placeholders over the parts of the project
file name::

    {Path}            i18n/app.json
    {Dir}             i18n
    {Base}            app.json
    {Ext}             .json
    {PathWithoutExt}  i18n/app
    {Locale}          fr-FR
"""
import os
import posixpath

from ..exceptions import ConfigurationError

DEFAULT_PULL_FILE_PATH = "{PathWithoutExt}.{Locale}{Ext}"


class FilenameParts:
    """Named pieces of a project file path plus the target locale."""

    def __init__(self, path, locale):
        self.path = path
        self.dir = posixpath.dirname(path) or "."
        self.base = posixpath.basename(path)
        self.ext = posixpath.splitext(path)[1]
        self.path_without_ext = path[:len(path) - len(self.ext)] if self.ext else path
        self.locale = locale

    def as_template_fields(self):
        return {
            "Path": self.path,
            "Dir": self.dir,
            "Base": self.base,
            "Ext": self.ext,
            "PathWithoutExt": self.path_without_ext,
            "Locale": self.locale,
        }


def render_template(template: str, parts: FilenameParts) -> str:
    """Expand a pull path template.

    Raises:
        ConfigurationError: On unknown placeholders or malformed templates
    """
    try:
        return template.format_map(parts.as_template_fields())
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown placeholder {e} in pull_file_path template {template!r}"
        ) from e
    except (ValueError, IndexError, AttributeError) as e:
        raise ConfigurationError(
            f"Invalid pull_file_path template {template!r}: {e}"
        ) from e


def render_pull_path(project_file: str, locale: str, template: str = "", root: str = ".") -> str:
    """Local destination of a translated project file.

    Args:
        project_file: Project-relative source path
        locale: Locale identifier
        template: Path template; the default keeps the source path and
            inserts the locale before the extension
        root: Project root the rendered path is relative to

    Returns:
        Destination path relative to the current directory

    Example:
        >>> render_pull_path("a/b.json", "fr-FR", "{Dir}/{Locale}/{Base}")
        'a/fr-FR/b.json'
        >>> render_pull_path("a/b.json", "fr-FR")
        'a/b.fr-FR.json'
    """
    parts = FilenameParts(project_file.replace(os.sep, "/"), locale)
    rendered = render_template(template or DEFAULT_PULL_FILE_PATH, parts)
    if not rendered:
        raise ConfigurationError(f"pull_file_path template {template!r} rendered an empty path")
    return os.path.relpath(os.path.join(root, rendered))

"""File type detection for project files.

Maps local file extensions to the remote service's file type names.
"""
import os

from ..exceptions import ConfigurationError

FILE_TYPES_BY_EXTENSION = {
    '.json': 'json',
    '.xml': 'android',
    '.strings': 'ios',
    '.po': 'gettext',
    '.pot': 'gettext',
    '.yml': 'yaml',
    '.yaml': 'yaml',
    '.properties': 'javaProperties',
    '.html': 'html',
    '.htm': 'html',
    '.xlf': 'xliff',
    '.xliff': 'xliff',
    '.resx': 'resx',
    '.csv': 'csv',
    '.docx': 'docx',
    '.md': 'markdown',
    '.txt': 'plainText',
}


def file_type_by_extension(ext: str) -> str:
    """Return the file type for an extension, or an empty string.

    Example:
        >>> file_type_by_extension('.YAML')
        'yaml'
        >>> file_type_by_extension('.bin')
        ''
    """
    return FILE_TYPES_BY_EXTENSION.get(ext.lower(), '')


def detect_file_type(project_file: str, default: str = '') -> str:
    """Resolve the file type of a project file.

    The extension is tried first, then the project-wide *default*.

    Args:
        project_file: Project-relative path
        default: Configured fallback file type

    Returns:
        File type name

    Raises:
        ConfigurationError: If neither the extension nor *default* resolves
    """
    file_type = file_type_by_extension(os.path.splitext(project_file)[1]) or default
    if not file_type:
        raise ConfigurationError(f"Can't determine file type for {project_file}")
    return file_type

"""Remote namespace prefixes for ``locsync push``.

A prefix (normally the git branch or the user name) isolates a push from
the canonical, un-prefixed namespace.
"""
import getpass
import os
import posixpath
import subprocess
from typing import Optional

from .logger import get_logger

log = get_logger(__name__)

# Branches whose pushes go to the canonical namespace
CANONICAL_BRANCHES = ("master", "main")


def clean_prefix(prefix: Optional[str]) -> str:
    """Normalize a prefix to ``/segment[/segment...]`` or ``""``.

    Example:
        >>> clean_prefix("feature-x/")
        '/feature-x'
        >>> clean_prefix("/")
        ''
        >>> clean_prefix(None)
        ''
    """
    cleaned = posixpath.normpath("/" + (prefix or "").replace("\\", "/"))
    # normpath keeps a leading '//' as-is
    cleaned = "/" + cleaned.lstrip("/")
    return "" if cleaned == "/" else cleaned


def remote_path_for(prefix: str, project_file: str) -> str:
    """Remote file URI for a project file pushed under *prefix*.

    Example:
        >>> remote_path_for("/feature-x", "copy.json")
        '/feature-x/copy.json'
        >>> remote_path_for("", "i18n/./copy.json")
        'i18n/copy.json'
    """
    project_file = project_file.replace("\\", "/")
    if not prefix:
        return posixpath.normpath(project_file)
    return posixpath.normpath(clean_prefix(prefix) + "/" + project_file)


def current_git_branch(cwd: Optional[str] = None) -> Optional[str]:
    """Return the checked-out git branch, or None outside a branch."""
    try:
        result = subprocess.run(
            ['git', 'rev-parse', '--abbrev-ref', 'HEAD'],
            capture_output=True, text=True, timeout=5, cwd=cwd,
        )
    except (OSError, subprocess.SubprocessError) as e:
        log.debug("git unavailable: %s", e)
        return None

    if result.returncode != 0:
        return None

    branch = result.stdout.strip()
    if not branch or branch == 'HEAD':
        return None
    return branch


def current_user_name() -> str:
    """Real user name, honouring ``SUDO_USER`` when running under sudo."""
    return os.environ.get('SUDO_USER') or getpass.getuser()


def default_push_prefix(cwd: Optional[str] = None) -> str:
    """Prefix used by ``locsync push`` when ``--prefix`` is not given.

    The current git branch, except that ``master``/``main`` push to the
    canonical namespace. Outside git (or on a detached HEAD) the user
    name is used.
    """
    branch = current_git_branch(cwd)
    if branch is None:
        return current_user_name()
    if branch in CANONICAL_BRANCHES:
        return ""
    return branch

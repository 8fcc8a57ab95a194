"""
File system utilities
"""
import hashlib
import json
import os
import tempfile

from ..logger import get_logger

log = get_logger(__name__)


def ensure_dir(directory):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path (empty string means the current directory)
    """
    if directory:
        os.makedirs(directory, exist_ok=True)


def load_json(filepath, default=None):
    """
    Load data from JSON file.

    Args:
        filepath: Path to JSON file
        default: Default value if file doesn't exist or is unreadable

    Returns:
        Loaded data or default value
    """
    if not os.path.exists(filepath):
        return default

    try:
        with open(filepath, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        log.debug("Unreadable JSON in %s: %s", filepath, e)
        return default


def write_bytes(filepath, data):
    """
    Write *data* to *filepath*, creating parent directories and
    overwriting any existing file.

    Errors propagate to the caller.

    Args:
        filepath: Destination path
        data: Bytes to write
    """
    ensure_dir(os.path.dirname(filepath))
    with open(filepath, 'wb') as f:
        f.write(data)


def write_json_atomic(filepath, data):
    """
    Atomically replace *filepath* with the JSON encoding of *data*.

    The document is written to a temporary file in the same directory and
    moved into place with :func:`os.replace`, so readers see either the old
    file or the complete new one.

    Args:
        filepath: Destination path
        data: JSON-serializable data
    """
    directory = os.path.dirname(filepath)
    ensure_dir(directory)

    fd, tmp_path = tempfile.mkstemp(dir=directory or None, prefix='.tmp-', suffix='.json')
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(data, f, separators=(',', ':'))
        os.replace(tmp_path, filepath)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def file_sha256(filepath):
    """
    Hash the contents of a local file.

    Args:
        filepath: Path to the file

    Returns:
        Hex SHA-256 digest of the file contents
    """
    digest = hashlib.sha256()
    with open(filepath, 'rb') as f:
        for chunk in iter(lambda: f.read(65536), b''):
            digest.update(chunk)
    return digest.hexdigest()

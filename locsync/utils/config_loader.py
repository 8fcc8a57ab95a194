"""
Configuration loader for locsync.json project files
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from colorama import Fore, Style

from ..exceptions import ConfigurationError
from ..models.project import (
    DEFAULT_API_URL, DEFAULT_CACHE_MAX_AGE_HOURS, DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT, ProjectConfig,
)
from .logger import get_logger

log = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "locsync.json"

# Environment variables that override the matching config keys.
ENV_OVERRIDES = {
    "LOCSYNC_API_KEY": "api_key",
    "LOCSYNC_PROJECT_ID": "project_id",
    "LOCSYNC_API_URL": "api_url",
}

# Template for a new locsync.json; also the set of keys --config may update.
DEFAULT_CONFIG: Dict[str, Any] = {
    "api_url": DEFAULT_API_URL,
    "api_key": "",
    "project_id": "",
    "files": [],
    "file_type": "",
    "parser_config": {},
    "pull_file_path": "",
    "max_workers": DEFAULT_MAX_WORKERS,
    "cache_max_age_hours": DEFAULT_CACHE_MAX_AGE_HOURS,
    "timeout": DEFAULT_TIMEOUT,
}


class ConfigLoader:
    """Handles locating, loading and saving the project configuration."""

    @staticmethod
    def find_project_config(start_dir=None) -> Optional[Path]:
        """
        Find locsync.json in *start_dir* or any of its parents.

        Args:
            start_dir: Directory to start from (defaults to the cwd)

        Returns:
            Path to the config file, or None if there is none
        """
        current = Path(start_dir or os.getcwd()).resolve()
        for directory in [current, *current.parents]:
            candidate = directory / PROJECT_CONFIG_FILENAME
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def read_config_json(config_path) -> Dict[str, Any]:
        """
        Read and parse a locsync.json file.

        Raises:
            ConfigurationError: If the file is unreadable or not a JSON object
        """
        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a JSON object")
        return data

    @staticmethod
    def load_project_config(start_dir=None, environ=None) -> ProjectConfig:
        """
        Load the project configuration that applies to *start_dir*.

        Credentials from ``LOCSYNC_API_KEY`` / ``LOCSYNC_PROJECT_ID`` (and
        ``LOCSYNC_API_URL``) take precedence over the file.

        Args:
            start_dir: Directory to search from (defaults to the cwd)
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Validated :class:`ProjectConfig`

        Raises:
            ConfigurationError: If no usable configuration is found
        """
        config_path = ConfigLoader.find_project_config(start_dir)
        if config_path is None:
            raise ConfigurationError(
                f"No {PROJECT_CONFIG_FILENAME} found in {Path(start_dir or os.getcwd()).resolve()} "
                f"or any parent directory"
            )

        data = ConfigLoader.read_config_json(config_path)

        environ = os.environ if environ is None else environ
        for env_name, key in ENV_OVERRIDES.items():
            if environ.get(env_name):
                data[key] = environ[env_name]

        config = ProjectConfig.from_dict(data, root=str(config_path.parent), config_path=str(config_path))
        config.validate()

        if not config.api_key or not config.project_id:
            raise ConfigurationError(
                "Missing credentials: set api_key/project_id in "
                f"{PROJECT_CONFIG_FILENAME} or LOCSYNC_API_KEY/LOCSYNC_PROJECT_ID"
            )

        log.debug("Loaded project config %s (%d file(s))", config_path, len(config.files))
        return config


def _mask(key, value):
    if any(sensitive in key.lower() for sensitive in ['token', 'key', 'password', 'secret']):
        if value and len(str(value)) > 4:
            return f"{str(value)[:4]}...{'*' * 8}"
    return value


def handle_config_update(config_json_string, start_dir=None):
    """Handle the ``--config`` option.

    Updates existing keys of the nearest locsync.json, creating the file
    from :data:`DEFAULT_CONFIG` in *start_dir* when there is none.

    Args:
        config_json_string: JSON object with config updates
        start_dir: Directory to search from (defaults to the cwd)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        print(f"{Fore.RED}[ERROR] Invalid JSON in --config argument: {e}{Style.RESET_ALL}")
        return 1

    if not isinstance(config_updates, dict):
        print(f"{Fore.RED}[ERROR] --config must be a JSON object (dictionary){Style.RESET_ALL}")
        return 1

    config_path = ConfigLoader.find_project_config(start_dir)
    if config_path is None:
        config_path = Path(start_dir or os.getcwd()).resolve() / PROJECT_CONFIG_FILENAME
        current_config = dict(DEFAULT_CONFIG)
        print(f"{Fore.YELLOW}[INFO] Creating {config_path}{Style.RESET_ALL}")
    else:
        try:
            current_config = ConfigLoader.read_config_json(config_path)
        except ConfigurationError as e:
            print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
            return 1

    valid_keys = set(DEFAULT_CONFIG) | set(current_config)
    invalid_keys = [key for key in config_updates if key not in valid_keys]
    if invalid_keys:
        print(f"{Fore.RED}[ERROR] Invalid configuration key(s): {', '.join(invalid_keys)}{Style.RESET_ALL}")
        print(f"\n{Fore.YELLOW}Valid keys in {PROJECT_CONFIG_FILENAME}:{Style.RESET_ALL}")
        for key in sorted(valid_keys):
            print(f"  • {key}")
        return 1

    current_config.update(config_updates)

    try:
        with open(config_path, 'w') as f:
            json.dump(current_config, f, indent=2)
    except OSError as e:
        print(f"{Fore.RED}[ERROR] Failed to update configuration: {e}{Style.RESET_ALL}")
        return 1

    print(f"\n{Fore.GREEN}[SUCCESS] Configuration updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        print(f"  {key}: {_mask(key, value)}")

    print(f"\n{Fore.CYAN}Config file: {config_path}{Style.RESET_ALL}\n")
    return 0

"""Mode handlers for the locsync CLI.

This package contains mode-specific handlers that encapsulate
the workflow logic for each subcommand.

Subcommand handlers:
  - StatusHandler  → locsync status
  - PullHandler    → locsync pull
  - PushHandler    → locsync push
"""
from .base_handler import ModeHandler
from .status_handler import StatusHandler
from .pull_handler import PullHandler
from .push_handler import PushHandler

__all__ = [
    'ModeHandler',
    'StatusHandler',
    'PullHandler',
    'PushHandler',
]

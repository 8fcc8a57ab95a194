"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from colorama import Fore, Style

from ..exceptions import LocSyncError
from ..utils.logger import get_logger

log = get_logger(__name__)


class ModeHandler(ABC):
    """Abstract base class for all subcommand handlers."""

    def __init__(self, app, args=None):
        """Initialize mode handler with the LocSync application.

        Args:
            app: Main LocSync CLI instance with config, client and engine
            args: Parsed command-line arguments for the subcommand
        """
        self.app = app
        self.args = args
        self.config = app.config
        self.engine = app.engine

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Any :class:`LocSyncError` raised by the workflow is fatal: it is
        logged and the command exits with status 1. Temp artifacts are
        removed whether the workflow succeeds or not.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        try:
            result = self.execute_workflow(context)
        except LocSyncError as e:
            log.error("%s", e)
            result = False
        finally:
            self.engine.cleanup()

        if result:
            self.display_completion(result)

        return 0 if result else 1

    @abstractmethod
    def display_banner(self):
        """Display mode-specific banner."""
        pass

    def validate_prerequisites(self) -> bool:
        """Validate prerequisites for this mode.

        Default implementation requires at least one project file.

        Returns:
            True if prerequisites are met, False otherwise
        """
        if not self.config.files:
            print(f"{Fore.RED}[ERROR] No project files configured{Style.RESET_ALL}")
            return False
        return True

    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """
        return {'files': list(self.config.files)}

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """
        pass

    def display_completion(self, result: Any):
        """Display completion message. Override for custom completion display."""
        pass

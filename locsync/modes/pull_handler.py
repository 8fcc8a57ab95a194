"""Handler for the 'pull' subcommand.

Usage:
    locsync pull [--no-cache]
"""
import threading

from colorama import Fore, Style

from ..utils.display.display_utils import print_banner, print_pull_result
from .base_handler import ModeHandler


class PullHandler(ModeHandler):
    """Handles ``locsync pull`` — write translated files for every locale."""

    def __init__(self, app, args=None):
        super().__init__(app, args)
        self._print_lock = threading.Lock()

    def display_banner(self):
        print_banner("Pull Translations")

    def prepare_context(self):
        context = super().prepare_context()
        context['use_cache'] = not getattr(self.args, 'no_cache', False)
        return context

    def _report(self, result):
        with self._print_lock:
            print_pull_result(result)

    def execute_workflow(self, context):
        locales = self.engine.locales()

        return self.engine.pull(
            context['files'],
            locales,
            use_cache=context['use_cache'],
            callback=self._report,
        ) or True

    def display_completion(self, result):
        if result is True:
            return
        cached = sum(1 for r in result if r.cached)
        print(
            f"\n{Fore.GREEN}[SUCCESS] Wrote {len(result)} file(s)"
            f" ({cached} from cache){Style.RESET_ALL}"
        )

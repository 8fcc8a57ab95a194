"""Handler for the 'push' subcommand.

Usage:
    locsync push [--prefix PREFIX]
"""
import threading

from colorama import Fore, Style

from ..utils.display.display_utils import print_banner, print_push_result
from ..utils.prefix import clean_prefix, default_push_prefix
from .base_handler import ModeHandler


class PushHandler(ModeHandler):
    """Handles ``locsync push`` — upload source files, pruning no-op prefixed uploads."""

    def __init__(self, app, args=None):
        super().__init__(app, args)
        self._print_lock = threading.Lock()

    def display_banner(self):
        print_banner("Push Source Files")

    def prepare_context(self):
        context = super().prepare_context()

        prefix = getattr(self.args, 'prefix', None)
        if not prefix:
            prefix = default_push_prefix(self.config.root)
        prefix = clean_prefix(prefix)

        if prefix:
            print(f"Using prefix {Fore.WHITE}{prefix}{Style.RESET_ALL}")

        context['prefix'] = prefix
        return context

    def _report(self, result):
        with self._print_lock:
            print_push_result(result)

    def execute_workflow(self, context):
        locales = self.engine.locales()

        return self.engine.push(
            context['files'],
            context['prefix'],
            locales,
            callback=self._report,
        ) or True

    def display_completion(self, result):
        if result is True:
            return
        retracted = sum(1 for r in result if r.retracted)
        if retracted:
            print(
                f"\n{Fore.CYAN}[INFO] {retracted} file(s) had no new strings "
                f"and were removed again{Style.RESET_ALL}"
            )

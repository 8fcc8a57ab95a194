"""Handler for the 'status' subcommand.

Usage:
    locsync status
"""
from ..utils.display.display_utils import print_banner, print_status_report
from .base_handler import ModeHandler


class StatusHandler(ModeHandler):
    """Handles ``locsync status`` — per-locale progress of the local files."""

    def display_banner(self):
        print_banner("Project Status")

    def execute_workflow(self, context):
        files = context['files']
        locales = self.engine.locales()

        matrix = self.engine.compute_status(files, locales)

        print_status_report(matrix, files, locales)
        return True

"""
Display and UI utilities for locsync
"""
from colorama import Fore, Style

from .status_table import STATUS_LEGEND, render_status_table


def print_banner(title):
    """Print a subcommand header, e.g. ``▸ Project Status``."""
    print(f"\n{Fore.CYAN}  ▸ {title}{Style.RESET_ALL}\n")


def print_status_report(matrix, files, locales):
    """
    Print the legend followed by the status table.

    Args:
        matrix: StatusMatrix to render
        files: Row order (project files)
        locales: Column order
    """
    print(f"{Fore.CYAN}{STATUS_LEGEND}{Style.RESET_ALL}\n")
    print(render_status_table(matrix, files, locales), end='')


def print_pull_result(result):
    """Print one pulled destination, dimming cache hits."""
    if result.cached:
        print(f"{result.destination} {Fore.LIGHTBLACK_EX}(using cache){Style.RESET_ALL}")
    else:
        print(result.destination)


def print_push_result(result):
    """Print the unauthorised-string count of a kept upload.

    Retracted uploads added nothing and are not reported.
    """
    if result.retracted:
        return
    colour = Fore.YELLOW if result.status.awaiting_authorization_count() else Fore.GREEN
    print(f"{colour}{result.describe()}{Style.RESET_ALL}")

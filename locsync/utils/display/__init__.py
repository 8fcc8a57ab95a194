"""Display utilities sub-package.

Contains console output helpers and the status table renderer.
"""
from .display_utils import (
    print_banner,
    print_status_report,
    print_pull_result,
    print_push_result,
)
from .status_table import STATUS_LEGEND, format_columns, render_status_table

__all__ = [
    'print_banner',
    'print_status_report',
    'print_pull_result',
    'print_push_result',
    'STATUS_LEGEND',
    'format_columns',
    'render_status_table',
]

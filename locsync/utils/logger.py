"""Diagnostic logging for locsync.

Command results (the status table, pulled paths, push counts) are printed
to stdout by the mode handlers. Everything else (progress detail, warnings,
the error that ends a command) goes through the ``locsync`` logger to
stderr, so ``locsync pull > files.txt`` captures results only.

Importing locsync never configures logging; the CLI calls
:func:`setup_logging` once from ``main()``. Library users get a silent
``NullHandler`` until they configure logging themselves.
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging", "DiagnosticFormatter"]

LOGGER_NAMESPACE = "locsync"

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.LIGHTBLACK_EX,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())


class DiagnosticFormatter(logging.Formatter):
    """``[LEVEL] message`` with a coloured tag.

    With *show_origin* (``--verbose``) the emitting module is appended,
    e.g. ``[DEBUG] Cache miss for app.json [fr-FR] (translation.cache)``.
    """

    def __init__(self, show_origin=False):
        super().__init__("%(message)s")
        self.show_origin = show_origin

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        line = f"{colour}[{record.levelname}]{Style.RESET_ALL} {super().format(record)}"
        if self.show_origin:
            origin = record.name
            if origin.startswith(LOGGER_NAMESPACE + "."):
                origin = origin[len(LOGGER_NAMESPACE) + 1:]
            line += f" {Fore.LIGHTBLACK_EX}({origin}){Style.RESET_ALL}"
        return line


def setup_logging(verbose: bool = False, quiet: bool = False, stream=None) -> logging.Handler:
    """Send locsync diagnostics to *stream* (stderr by default).

    Safe to call more than once: the handler installed by a previous call
    is replaced, never duplicated.

    Args:
        verbose: Show DEBUG records and the module each came from
        quiet: Only show warnings and errors (wins over *verbose*)
        stream: Output stream, resolved at call time

    Returns:
        The installed handler
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(root.handlers):
        if getattr(handler, "_locsync_cli", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(DiagnosticFormatter(show_origin=verbose and not quiet))
    handler._locsync_cli = True
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger for *name* inside the ``locsync`` namespace.

    Has no side effects; output depends on :func:`setup_logging`.
    """
    if name != LOGGER_NAMESPACE and not name.startswith(LOGGER_NAMESPACE + "."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)

"""
locsync - Main CLI interface
Translation project synchronization CLI Tool

Subcommands operate on the project described by the nearest
``locsync.json``: ``status`` reports per-locale progress of the local
files, ``pull`` writes translated files, ``push`` uploads source files.
"""
import argparse
import signal
import sys

from colorama import Fore, Style, init

from .exceptions import ConfigurationError
from .services.translation import ProjectSyncEngine, TranslationClient
from .utils.config_loader import ConfigLoader, handle_config_update

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

STATUS_EXAMPLES = """\
Examples:
  locsync status
  locsync --workers 4 status

Each cell reads: Awaiting Authorization -> In Progress -> Completed
"""

PULL_EXAMPLES = """\
Examples:
  locsync pull
  locsync pull --no-cache

Destinations follow "pull_file_path" in locsync.json, e.g.
  "{Dir}/{Locale}/{Base}"          i18n/fr-FR/app.json
  "{PathWithoutExt}.{Locale}{Ext}" i18n/app.fr-FR.json (default)
"""

PUSH_EXAMPLES = """\
Examples:
  locsync push                       # prefix = git branch or user name
  locsync push --prefix feature-x    # upload under /feature-x/...
  locsync push --prefix /            # canonical namespace, no prefix

Under a prefix, uploads that add no new strings are deleted again.
"""


class LocSync:
    """Main CLI application class."""

    def __init__(self, config, max_workers=None, client=None, engine=None):
        """Initialize CLI application.

        Args:
            config: Loaded ProjectConfig
            max_workers: Optional override of ``config.max_workers``
            client: Optional TranslationClient (built from config if omitted)
            engine: Optional ProjectSyncEngine (built from config if omitted)
        """
        self.config = config
        self.client = client or TranslationClient.from_config(config)
        self.engine = engine or ProjectSyncEngine(config, self.client, max_workers=max_workers)

        # Setup signal handler for graceful shutdown
        signal.signal(signal.SIGINT, self.signal_handler)

    def signal_handler(self, sig, frame):
        """Handle Ctrl+C: remove temp artifacts and exit."""
        print(f"\n\n{Fore.YELLOW}[INFO] Interrupted, cleaning up temp files...{Style.RESET_ALL}")
        self.engine.cleanup()
        sys.exit(130)


# ── Argument Parser ────────────────────────────────────────────────────────

def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='locsync',
        description='locsync — sync local source files with a translation service',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags (apply to all subcommands)
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--config', help='Update locsync.json with JSON string')
    parser.add_argument('--workers', type=int, default=None,
                        help='Maximum concurrent requests (overrides max_workers)')

    # Shared parent so --verbose works after the subcommand name too
    _verbose_parent = argparse.ArgumentParser(add_help=False)
    _verbose_parent.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS,
                                 help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── status ─────────────────────────────────────────────────────────
    subparsers.add_parser(
        'status',
        parents=[_verbose_parent],
        help="Show translation progress of the project's local files",
        description='Show per-locale translation counts for every project file.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=STATUS_EXAMPLES,
    )

    # ── pull ───────────────────────────────────────────────────────────
    pull_parser = subparsers.add_parser(
        'pull',
        parents=[_verbose_parent],
        help='Translate local project files using the service as a translation memory',
        description='Fetch translations of every project file for every locale.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=PULL_EXAMPLES,
    )
    pull_parser.add_argument('--no-cache', action='store_true',
                             help='Ignore cached translations (entries are refreshed)')

    # ── push ───────────────────────────────────────────────────────────
    push_parser = subparsers.add_parser(
        'push',
        parents=[_verbose_parent],
        help='Upload local project files with new strings, using the git branch or user name as a prefix',
        description='Upload every project file to the translation service.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=PUSH_EXAMPLES,
    )
    push_parser.add_argument('--prefix', help='Use the specified prefix instead of the default')

    return parser


def _bootstrap(args):
    """Load the project config and build the application.

    Returns:
        Tuple of (LocSync instance or None, exit code or None)
    """
    try:
        config = ConfigLoader.load_project_config()
    except ConfigurationError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}[TIP] Run: locsync --config '{{\"files\": [\"path/to/strings.json\"]}}'{Style.RESET_ALL}")
        return None, 1

    if args.workers is not None and args.workers < 1:
        print(f"{Fore.RED}[ERROR] --workers must be at least 1{Style.RESET_ALL}")
        return None, 1

    return LocSync(config, max_workers=args.workers), None


def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=getattr(args, 'verbose', False), quiet=args.quiet)

    # Handle --config (no project needed)
    if args.config:
        return handle_config_update(args.config)

    if args.command is None:
        parser.print_help()
        return 1

    app, exit_code = _bootstrap(args)
    if exit_code is not None:
        return exit_code

    from .modes.status_handler import StatusHandler
    from .modes.pull_handler import PullHandler
    from .modes.push_handler import PushHandler

    handlers = {
        'status': lambda: StatusHandler(app, args),
        'pull': lambda: PullHandler(app, args),
        'push': lambda: PushHandler(app, args),
    }

    return handlers[args.command]().execute()


if __name__ == '__main__':
    sys.exit(main())

# ============================================================================
# SOURCEFILE: cli.py
# RELPATH: bczip/src/bczip/cli.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Command-line entry point and option resolution
# ============================================================================

"""Command-Line Interface for bczip."""

import argparse
import logging
import re
import sys
from typing import List, Optional, Tuple

from bczip import APP_NAME, EXTENSION, VERSION
from bczip.core.config import ConfigManager
from bczip.core.console import Console
from bczip.core.container import Container
from bczip.core.driver import Driver
from bczip.core.exceptions import BczipError, InvalidOptionError
from bczip.core.executor import JobExecutor
from bczip.core.logging import configure_utf8_logging, new_session
from bczip.core.models import Action, GlobalOptions
from bczip.core.paths import SuffixResolver


logger = logging.getLogger(__name__)

HELP_TEXT = (
    f"Usage: {APP_NAME} [OPTION]... [FILE]...\n"
    "Compress or uncompress FILEs (by default, compress FILES in-place).\n"
    "\n"
    "  -c, --stdout      write on standard output, keep original files unchanged\n"
    "  -d, --decompress  decompress\n"
    "  -f, --force       force overwrite of output file\n"
    "  -h, --help        give this help\n"
    "  -k, --keep        keep (don't delete) input files\n"
    "  -q, --quiet       suppress all warnings\n"
    "  -v, --verbose     verbose mode\n"
    "  -V, --version     display version number\n"
    "\n"
    "With no FILE, read standard input.\n"
)

VERSION_TEXT = f"{APP_NAME} {VERSION}\n"

_QUOTED = re.compile(r"'([^']*)'")


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message):
        raise InvalidOptionError(_offending_token(message))


def _offending_token(message: str) -> str:
    # "argument -d/--decompress: ignored explicit argument 'x'"
    quoted = _QUOTED.findall(message)
    if "explicit argument" in message and quoted:
        return "-" + quoted[-1][:1]
    # "unrecognized arguments: --foo"
    if ":" in message:
        tail = message.rsplit(":", 1)[1].split()
        if tail:
            return tail[0]
    return message


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = _OptionParser(prog=APP_NAME, add_help=False, allow_abbrev=False)

    parser.add_argument("-c", "--stdout", dest="to_stdout", action="store_true")
    parser.add_argument("-d", "--decompress", action="store_true")
    parser.add_argument("-f", "--force", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-k", "--keep", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-V", "--version", action="store_true")
    parser.add_argument("files", nargs="*")

    return parser


def parse_options(argv: List[str]) -> Tuple[GlobalOptions, List[str]]:
    """
    Resolve command-line tokens into options and file arguments.

    Help anywhere on the command line wins over everything else, version
    wins over the remaining flags.

    Raises:
        InvalidOptionError: On an unrecognized option
    """
    args, extras = build_parser().parse_known_intermixed_args(argv)
    if extras:
        raise InvalidOptionError(extras[0])

    if args.help:
        action = Action.HELP
    elif args.version:
        action = Action.VERSION
    else:
        action = Action.RUN

    options = GlobalOptions(
        action=action,
        decompress=args.decompress,
        keep=args.keep,
        force=args.force,
        quiet=args.quiet,
        verbose=args.verbose,
        to_stdout=args.to_stdout,
    )
    # A lone dash is an empty option group, not a file name
    files = [name for name in args.files if name != "-"]
    return options, files


def main(argv: Optional[List[str]] = None,
         console: Optional[Console] = None,
         config: Optional[ConfigManager] = None):
    """Main CLI entry point."""
    configure_utf8_logging()
    argv = sys.argv[1:] if argv is None else argv
    console = console or Console()

    try:
        options, files = parse_options(argv)

        if options.action is Action.HELP:
            console.write_out(HELP_TEXT)
            sys.exit(0)

        if options.action is Action.VERSION:
            console.write_out(VERSION_TEXT)
            sys.exit(0)

        if not files and console.stdin_is_tty():
            # Nothing to read without blocking on a terminal
            console.write_out(HELP_TEXT)
            sys.exit(0)

        config = config or ConfigManager.from_default_location()
        config.validate()
        configure_utf8_logging(level=config.get("logging.level", "WARNING"))

        session = new_session(config.log_dir)
        executor = JobExecutor(
            console,
            container=Container(config.build_codec()),
            resolver=SuffixResolver(EXTENSION),
            chunk_size=config.chunk_size,
            session=session,
            app_name=APP_NAME,
        )
        summary = Driver(executor, console, app_name=APP_NAME).run(files, options)
        logger.debug("run finished: %s", summary.as_stats())
        logger.debug("session events: %s", session.export_session_summary()["eventCounts"])

        sys.exit(0)

    except KeyboardInterrupt:
        console.write_err("\n")
        sys.exit(130)

    except BczipError as e:
        console.write_err(f"{APP_NAME}: {e}\n")
        sys.exit(1)

    except Exception as e:
        console.write_err(f"{APP_NAME}: {e}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()

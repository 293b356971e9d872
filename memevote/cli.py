#!/usr/bin/env python3
"""
MemeVote Console Entry Point

Runs console commands against a fresh in-process registry.

Usage:
    python -m memevote.cli                       # Interactive, reads stdin
    python -m memevote.cli script.txt            # Execute commands from a file
    python -m memevote.cli --identity alice      # Initial caller identity
    python -m memevote.cli --page-size 20        # Default LIST/TOP limit
    python -m memevote.cli --debug               # Enable debug logging

Environment Variables:
    MEMEVOTE_IDENTITY   - Initial caller identity
    MEMEVOTE_PAGE_SIZE  - Default LIST/TOP limit
    MEMEVOTE_DEBUG      - Enable debug mode (true/false)
    MEMEVOTE_LOG_LEVEL  - Log level when not in debug mode
"""

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from .config.settings import settings
from .console.session import ConsoleSession
from .events.sinks import LoggingSink
from .registry.locking import SynchronizedRegistry
from .registry.registry import Registry

PROMPT = ">>> "


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="MemeVote: meme registry console",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "script",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=None,
        help="File of console commands (default: stdin)",
    )

    parser.add_argument(
        "--identity",
        type=str,
        default=settings.DEFAULT_IDENTITY,
        help="Caller identity for CREATE and VOTE",
    )

    parser.add_argument(
        "--page-size",
        type=int,
        default=settings.DEFAULT_PAGE_SIZE,
        help="Default number of records for LIST and TOP",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def _prompted_lines(stream: TextIO, output: TextIO) -> Iterator[str]:
    """Yield lines from an interactive stream, printing a prompt before each."""
    while True:
        output.write(PROMPT)
        output.flush()
        line = stream.readline()
        if not line:
            output.write("\n")
            return
        yield line


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    registry = SynchronizedRegistry(Registry(sink=LoggingSink()))
    session = ConsoleSession(registry, identity=args.identity, page_size=args.page_size)

    if args.script is not None:
        lines = args.script
    elif sys.stdin.isatty():
        lines = _prompted_lines(sys.stdin, sys.stdout)
    else:
        lines = sys.stdin

    logger.debug(f"Starting console as {args.identity!r}, page size {args.page_size}")

    try:
        executed = session.run(lines, sys.stdout.write)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        return 130
    finally:
        if args.script is not None:
            args.script.close()

    logger.debug(f"Executed {executed} commands; {registry.get_stats()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Entry point for hxe.
"""

import logging
import sys
from typing import Optional, Sequence

from .core import encoding
from .core.config import Config, build_parser, column_list
from .core.errors import HxeError
from .ui.app import Application

logger = logging.getLogger(__name__)


def setup_logging(log_file: Optional[str]) -> None:
    """Send debug output to a file; the terminal belongs to curses."""

    if not log_file:
        return

    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the application."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.encodings:
        print("encodings for use with --enc:")
        for name in encoding.names():
            print(name)
        return 0

    if not args.file:
        parser.print_usage(sys.stderr)
        print("hxe: error: no filename passed", file=sys.stderr)
        return 1

    try:
        config = Config.from_args(args)
    except HxeError as e:
        parser.print_usage(sys.stderr)
        print(f"hxe: error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_file)
    logger.info(
        "viewing %s: row=%d group=%d offset_base=%s cols=%s enc=%s",
        config.filename, config.bytes_per_row, config.group,
        config.offset_base, ','.join(column_list(config)), config.encoding
    )

    try:
        Application(config).run()
    except (HxeError, OSError) as e:
        logger.exception("fatal error")
        print(f"hxe: error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line interface for mdreport.

Usage:
    mdreport report.md report.pdf
    mdreport report.md report.pdf --logo logo.png --page-size LETTER
    mdreport --version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ReportConfig
from .exceptions import ReportError
from .utils.logger import LOG_LEVELS
from .utils.rich_logger import setup_logging
from .version import __version__

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdreport",
        description="mdreport - Markdown to paginated PDF reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mdreport report.md report.pdf
  mdreport report.md report.pdf --logo logo.png
  mdreport report.md report.pdf --body-font Body.ttf --heading-font Heading.ttf
        """,
    )
    parser.add_argument("input", nargs="?", help="Input Markdown file")
    parser.add_argument("output", nargs="?", help="Output PDF file")
    parser.add_argument("--logo", help="Image drawn at the top right of every page")
    parser.add_argument("--body-font", help="TrueType font for body text and code")
    parser.add_argument("--heading-font", help="TrueType font for headings")
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Render fenced code without syntax colours",
    )
    parser.add_argument(
        "--page-size",
        choices=["A4", "LETTER"],
        default="A4",
        help="Page size (default: A4)",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write logs to this rotating file")
    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version and exit",
    )
    return parser


def cmd_version() -> int:
    """Handle --version."""
    print(f"mdreport v{__version__}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Render ``args.input`` to ``args.output``."""
    from .api import render_markdown_file

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        config = ReportConfig.from_options(vars(args))
        render_markdown_file(input_path, args.output, config)
    except ReportError as exc:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"PDF generated: {Path(args.output).name}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.version:
        return cmd_version()

    if not args.input or not args.output:
        parser.print_usage(sys.stderr)
        print("Error: input and output files are required", file=sys.stderr)
        return 1

    setup_logging(args.log_level, log_file=args.log_file)
    return cmd_render(args)


if __name__ == "__main__":
    sys.exit(main())

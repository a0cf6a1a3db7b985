"""CLI entry point for romslog."""

import argparse
import logging
import sys
from pathlib import Path

from romslog import __version__
from romslog.errors import RomsLogError


def _configure_logging(verbose: bool, no_color: bool):
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="romslog",
        description="Summarize a ROMS ocean model run log (standard output transcript)",
    )
    parser.add_argument(
        "logfile",
        type=Path,
        help="Path to the ROMS log (.gz, .bz2 and .xz are decompressed)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write JSON report to file",
    )
    parser.add_argument(
        "--tail",
        type=int,
        default=10,
        help="Number of trailing time steps to show (0 shows all)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed parsing progress",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored terminal output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.no_color)

    from romslog.reader import read_log
    from romslog.report.terminal import render_summary
    from romslog.report.json_report import write_json_report

    try:
        summary = read_log(args.logfile, verbose=args.verbose)
    except RomsLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    render_summary(summary, no_color=args.no_color, tail=args.tail)

    if args.output:
        write_json_report(summary, args.output)
        from rich.console import Console
        console = Console(force_terminal=not args.no_color, no_color=args.no_color)
        console.print(f"\n[dim]JSON report saved to: {args.output}[/dim]")

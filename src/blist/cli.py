"""Command-line interface for .blist playlists.

This module provides the ``blist`` entry point with two commands:
``convert`` turns legacy JSON playlists into .blist archives, and
``show`` prints the validated manifest of a .blist archive.
"""

import argparse
import glob
import json
import logging
import os
import sys
from pathlib import Path

from .converter import convert_paths
from .errors import BlistError
from .playlist import Playlist


def configure_logging(verbose: bool) -> None:
    """Send the library's debug logs to stderr when running verbosely."""
    if not verbose:
        return
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("blist").setLevel(logging.DEBUG)


def format_elapsed(seconds: float) -> str:
    """Format a duration the way the summary line shows it (ms below one second)."""
    elapsed_ms = int(seconds * 1000)
    if elapsed_ms > 1000:
        return f"{elapsed_ms / 1000:.3f} s"
    return f"{elapsed_ms} ms"


def run_convert(args: argparse.Namespace) -> int:
    """Convert every legacy playlist matching the glob."""
    paths = sorted(Path(p) for p in glob.glob(args.glob, recursive=True) if os.path.isfile(p))

    if args.verbose:
        print(f"Found {len(paths)} playlists to convert", file=sys.stderr)

    report = convert_paths(
        paths,
        workers=args.workers,
        custom_data=args.custom_data,
        delete_converted=args.delete_converted,
        exit_on_error=args.exit_on_error,
        verbose=args.verbose,
    )
    if report.stopped_early:
        return 1

    print(f"Successfully converted {report.successful} playlists in {format_elapsed(report.elapsed)}")
    return 0


def run_show(args: argparse.Namespace) -> int:
    """Print the manifest of a .blist archive."""
    path = Path(args.path)
    if not path.is_file():
        print(f"Error: Path does not exist: {path}", file=sys.stderr)
        return 1

    try:
        playlist = Playlist.load(path)
    except (BlistError, OSError) as e:
        print(f"Error: Failed to load playlist: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Loaded `{playlist.title}` with {len(playlist.entries)} maps", file=sys.stderr)

    # Output JSON to stdout
    json.dump(playlist.to_manifest(), sys.stdout, indent=2, ensure_ascii=False)
    print()  # Add newline at end
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blist",
        description="Read, inspect and convert .blist playlists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert every legacy playlist in a folder
  blist convert "Playlists/*.bplist"

  # Convert recursively, dropping custom data, stopping on the first error
  blist convert "Playlists/**/*.json" --no-custom-data --exit-on-error

  # Print the manifest of a playlist
  blist show my-list.blist > playlist.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert legacy playlists to the .blist format")
    convert.add_argument("glob", metavar="GLOB", help="Glob pattern of files to convert")
    convert.add_argument("-v", "--verbose", action="store_true", help="Print verbose information")
    convert.add_argument(
        "--no-custom-data",
        dest="custom_data",
        action="store_false",
        help="Skip custom data when converting playlists",
    )
    convert.add_argument(
        "--exit-on-error",
        action="store_true",
        help="Exit when an error occurs instead of just displaying it",
    )
    convert.add_argument("--delete-converted", action="store_true", help="Delete converted files")
    convert.add_argument(
        "-w",
        "--workers",
        type=int,
        default=os.cpu_count() or 1,
        help="Number of parallel workers (default: number of CPUs)",
    )
    convert.set_defaults(handler=run_convert)

    show = subparsers.add_parser("show", help="Print the manifest of a .blist playlist")
    show.add_argument("path", help="Path to the .blist file")
    show.add_argument("-v", "--verbose", action="store_true", help="Print verbose information")
    show.set_defaults(handler=run_show)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the blist command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    sys.exit(args.handler(args))


if __name__ == "__main__":
    main()

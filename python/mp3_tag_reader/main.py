"""
MP3 Tag Reader - view and edit ID3v2.3 tags of MP3 files.

Usage:
    python -m mp3_tag_reader -v song.mp3
    python -m mp3_tag_reader -e -t "New Title" song.mp3
"""

import argparse
import sys
from typing import List, Optional

from .config import eprint, load_config, setup_logging, validate_config
from .id3_handler import ID3Handler
from .interactive import TagDisplay
from .models import ID3Error

# (short flag, long flag, frame ID)
TAG_OPTIONS = [
    ("-t", "--title", "TIT2"),
    ("-a", "--artist", "TPE1"),
    ("-A", "--album", "TALB"),
    ("-y", "--year", "TYER"),
    ("-g", "--genre", "TCON"),
    ("-c", "--comment", "COMM"),
]


class HelpOnErrorParser(argparse.ArgumentParser):
    """Argument parser that prints the full help and exits 1 on bad usage."""

    def error(self, message):
        eprint(f"{self.prog}: error: {message}\n")
        self.print_help(sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = HelpOnErrorParser(
        prog="mp3tag",
        description="View and edit ID3v2.3 tags of MP3 files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # View tags
  mp3tag -v song.mp3

  # Edit the title
  mp3tag -e -t "New Title" song.mp3

  # Edit the year
  mp3tag -e -y 1999 song.mp3

  # Values starting with "-" must be attached to the option
  mp3tag -e --comment=-live- song.mp3
"""
    )

    parser.add_argument(
        "-v", "--view",
        metavar="FILE",
        help="View the tags of FILE"
    )

    parser.add_argument(
        "-e", "--edit",
        action="store_true",
        help="Edit one tag: -e <tag option> VALUE FILE"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print tag values and errors"
    )

    tags = parser.add_argument_group(
        "tag options (with -e)",
        "Give values starting with '-' as --option=VALUE, e.g. --comment=-live-"
    )
    for short, long, frame_id in TAG_OPTIONS:
        tags.add_argument(
            short, long,
            metavar="VALUE",
            help=f"New {long[2:]} ({frame_id})"
        )

    parser.add_argument(
        "file",
        nargs="?",
        help="MP3 file to edit"
    )

    return parser


def _selected_tags(args: argparse.Namespace) -> List[tuple]:
    """Return (frame_id, value) for every tag option given."""
    return [
        (frame_id, getattr(args, long[2:]))
        for _, long, frame_id in TAG_OPTIONS
        if getattr(args, long[2:]) is not None
    ]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    selected = _selected_tags(args)

    viewing = args.view is not None and not args.edit and not selected and args.file is None
    editing = args.edit and args.view is None and args.file is not None

    if editing and len(selected) != 1:
        eprint("Invalid tag option: give exactly one of "
               + "/".join(short for short, _, _ in TAG_OPTIONS))
        editing = False

    if not (viewing or editing):
        parser.print_help(sys.stderr)
        return 1

    config = load_config()
    problems = validate_config(config)
    if problems:
        for problem in problems:
            eprint(f"Configuration error: {problem}")
        return 1

    setup_logging(config["log_level"])

    handler = ID3Handler(chunk_size=config["chunk_size"])
    display = TagDisplay(
        no_color=config["no_color"] or not sys.stdout.isatty(),
        quiet=args.quiet,
    )

    try:
        if viewing:
            try:
                record = handler.read_tags(args.view)
            except ID3Error as e:
                eprint(f"Error: {e}")
                eprint("Failed to read ID3 tags.")
                return 1
            display.show_tags(args.view, record)
        else:
            frame_id, value = selected[0]
            try:
                outcome = handler.edit_tag(args.file, frame_id, value)
            except ID3Error as e:
                eprint(f"Error: {e}")
                eprint("Failed to edit tag.")
                return 1
            display.show_edit_result(frame_id, outcome)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1

    return 0

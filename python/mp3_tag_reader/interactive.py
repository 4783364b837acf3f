"""Console display of tags and edit results."""

from pathlib import Path

from .config import eprint
from .models import EditOutcome, TagRecord

BANNER_WIDTH = 52


class TagDisplay:
    """Renders tag records on stdout and problems on stderr."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    # (label, frame ID) in display order
    FIELDS = [
        ("Title", "TIT2"),
        ("Artist", "TPE1"),
        ("Album", "TALB"),
        ("Year", "TYER"),
        ("Genre", "TCON"),
        ("Comment", "COMM"),
    ]

    def __init__(self, no_color: bool = False, quiet: bool = False):
        """
        Initialize display.

        Args:
            no_color: Disable colored output
            quiet: Suppress banners, notes and success messages
        """
        self.no_color = no_color
        self.quiet = quiet

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        """Print unless quiet mode."""
        if not self.quiet:
            print(*args, **kwargs)

    def show_tags(self, file_path: str, record: TagRecord) -> None:
        """Display every field of a record, 'Unknown' for absent ones."""
        rule = "-" * BANNER_WIDTH
        self.print(rule)
        self.print(self._c("bold", "MP3 TAG READER FOR ID3v2 TAGS".center(BANNER_WIDTH)))
        self.print(rule)
        self.print(f"{'File:':<9}{Path(file_path).name}")

        for label, frame_id in self.FIELDS:
            value = record.get(frame_id)
            shown = value if value is not None else self._c("dim", "Unknown")
            print(f"{label + ':':<9}{shown}")

        if record.is_empty():
            self.print(self._c("yellow", "No recognized text frames in this tag."))
        self.print(rule)

    def show_edit_result(self, frame_id: str, outcome: EditOutcome) -> None:
        """Report whether the frame was edited."""
        if outcome is EditOutcome.MODIFIED:
            self.print(self._c("green", "Tag edited successfully."))
        else:
            eprint(self._c("yellow", f"Tag {frame_id} not found."))

"""Map the abbreviations used in scripture asset files to canonical books."""

import re
from pathlib import Path

from .books import BookIndex, CanonicalBook, get_default_index
from .errors import UnknownBook

# "Genesis   . . . . . . . . . . . . . . . . .   GEN"
# "1-Samuel  . . . . . . . . . . . . . . . . .   SA1"
_CONTENTS_LINE = re.compile(r"^([A-Za-z0-9\-&]+)\s+\.\s+\.\s+.*\s+([A-Z0-9&]+)\s*$")


def load_contents_mapping(
    contents_path: str | Path, index: BookIndex | None = None
) -> dict[str, CanonicalBook]:
    """
    Parse a Contents.txt table of contents into abbreviation -> book.

    Book names are resolved through the index, so "1-Samuel" maps to the
    canonical "1 Samuel". Entries that are not books of the canon (prefaces,
    other collections) are skipped.

    Args:
        contents_path: Path to the Contents.txt file
        index: Book index to resolve names against (defaults to the bundled canon)

    Returns:
        Dictionary mapping abbreviations (e.g., "SA1") to canonical books
    """
    if index is None:
        index = get_default_index()

    contents_path = Path(contents_path)
    if not contents_path.exists():
        raise FileNotFoundError(f"Contents file not found: {contents_path}")

    mapping = {}
    with open(contents_path, "r", encoding="utf-8") as f:
        for line in f:
            match = _CONTENTS_LINE.search(line.strip())
            if not match:
                continue

            name, abbreviation = match.groups()
            try:
                mapping[abbreviation] = index.lookup_alias(name)
            except UnknownBook:
                continue

    return mapping

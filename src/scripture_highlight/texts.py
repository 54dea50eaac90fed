"""Load verse text from scripture asset files."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .book_mapping import load_contents_mapping
from .books import BookIndex, CanonicalBook, get_default_index
from .passages import VerseId

# "JON 1:1 Now the word of the LORD came unto Jonah..."
_VERSE_LINE = re.compile(r"^([A-Z0-9&]+)\s+(\d+):(\d+)\s+(.+)$")


@dataclass
class VerseLine:
    """One verse read from an asset file."""

    verse: VerseId
    text: str


def parse_scripture_file(
    file_path: str | Path, mapping: dict[str, CanonicalBook]
) -> list[VerseLine]:
    """
    Parse a scripture text file into verses.

    Lines numbered N:0 are section headings and are skipped, as are lines
    whose abbreviation is not in the mapping.

    Args:
        file_path: Path to the scripture text file
        mapping: Abbreviation -> canonical book, see load_contents_mapping

    Returns:
        List of VerseLine objects in file order
    """
    verses = []

    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            match = _VERSE_LINE.match(line.strip())
            if not match:
                continue

            abbreviation, chapter, verse, text = match.groups()
            book = mapping.get(abbreviation)
            if book is None or int(verse) == 0:
                continue

            verses.append(VerseLine(VerseId(book.ordinal, int(chapter), int(verse)), text))

    return verses


class VerseTextStore:
    """In-memory verse text keyed by VerseId, kept in file order."""

    def __init__(self, verses: list[VerseLine] | None = None):
        self._lines: dict[VerseId, VerseLine] = {}
        for line in verses or []:
            self._lines.setdefault(line.verse, line)

    @classmethod
    def from_assets(
        cls, assets_dir: str | Path, index: BookIndex | None = None
    ) -> "VerseTextStore":
        """
        Load every text file under ``assets_dir/bible``.

        Args:
            assets_dir: Directory containing Contents.txt and the bible/ folder
            index: Book index to resolve abbreviations against

        Returns:
            A populated VerseTextStore
        """
        assets_dir = Path(assets_dir)
        mapping = load_contents_mapping(assets_dir / "Contents.txt", index or get_default_index())

        verses = []
        for txt_file in sorted((assets_dir / "bible").glob("*.txt")):
            try:
                verses.extend(parse_scripture_file(txt_file, mapping))
            except (OSError, UnicodeDecodeError) as e:
                print(f"Warning: Failed to parse {txt_file}: {e}")

        return cls(verses)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, verse: VerseId) -> bool:
        return verse in self._lines

    def __iter__(self) -> Iterator[VerseLine]:
        return iter(self._lines.values())

    def get(self, verse: VerseId) -> str | None:
        line = self._lines.get(verse)
        return line.text if line is not None else None

"""Column layout of verse labels on the full-Bible page image."""

from typing import Iterable

from .books import BookIndex, get_default_index
from .highlights import BoundingBox
from .passages import VerseId
from .texts import VerseTextStore

LEFT_MARGIN = 12
TOP_MARGIN = 28
LINE_HEIGHT = 6
BOOK_GAP = 20
TESTAMENT_GAP = 30
COLUMN_WIDTH = 42
MAX_COLUMN_Y = 7800
NEW_TESTAMENT_START = "Matthew"


class GridLayout:
    """
    Places one small label per verse in top-to-bottom columns.

    Each book starts a new column, with extra space before the New
    Testament; a column wraps when it grows past MAX_COLUMN_Y. Only verses
    passed in are placed, so anything else is reported as not rendered.
    """

    def __init__(
        self,
        verses: Iterable[VerseId],
        index: BookIndex | None = None,
        texts: VerseTextStore | None = None,
    ):
        self.index = index or get_default_index()
        self.texts = texts
        self._boxes: dict[VerseId, BoundingBox] = {}

        x = LEFT_MARGIN
        y = TOP_MARGIN
        max_y = 0
        previous_book = None

        for verse in verses:
            if verse.book != previous_book:
                if previous_book is not None:
                    x += BOOK_GAP
                if self.index.book(verse.book).name == NEW_TESTAMENT_START:
                    x += TESTAMENT_GAP
                y = TOP_MARGIN
                previous_book = verse.book

            label_width = max(10, len(self.index.format_reference(verse)) * 3)
            # Labels are drawn on a baseline at y; pad the box around the glyphs
            self._boxes[verse] = BoundingBox(
                x=x - 1,
                y=y - LINE_HEIGHT + 2,
                width=label_width + 3,
                height=LINE_HEIGHT + 1,
            )

            y += LINE_HEIGHT
            max_y = max(max_y, y)
            if y > MAX_COLUMN_Y:
                x += COLUMN_WIDTH
                y = TOP_MARGIN

        self.width = x + 80
        self.height = max_y + 40

    @classmethod
    def from_index(cls, index: BookIndex | None = None) -> "GridLayout":
        """Lay out every verse the index knows about, in canonical order."""
        index = index or get_default_index()
        verses = (
            VerseId(book.ordinal, chapter, verse)
            for book in index
            for chapter, count in enumerate(book.verse_counts, start=1)
            for verse in range(1, count + 1)
        )
        return cls(verses, index=index)

    @classmethod
    def from_texts(cls, texts: VerseTextStore, index: BookIndex | None = None) -> "GridLayout":
        """Lay out only the verses that have text, in file order."""
        return cls((line.verse for line in texts), index=index, texts=texts)

    def __len__(self) -> int:
        return len(self._boxes)

    def locate(self, verse: VerseId) -> BoundingBox | None:
        return self._boxes.get(verse)

    def verse_text(self, verse: VerseId) -> str | None:
        if self.texts is None:
            return None
        return self.texts.get(verse)

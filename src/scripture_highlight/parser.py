"""Parse free-form reference text into structured passage expressions."""

import re
from typing import Iterator

from .books import BookIndex, CanonicalBook, get_default_index
from .errors import MalformedRange, UnknownBook
from .passages import (
    ChapterRange,
    CrossRange,
    PassageExpression,
    SameChapterRange,
    SingleVerse,
    WholeChapter,
)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_INLINE_SEPARATOR = re.compile(r"[;,]")

# Optional leading 1-3, then letters, spaces and periods:
# "1Jn", "1 John", "I John", "Song of Solomon", "Acts"
_BOOK = re.compile(r"^\s*((?:[1-3]\s*)?[A-Za-z][A-Za-z.\s]*)(.*)$", re.DOTALL)

_POINT = re.compile(r"^(\d+)(?::(\d+))?$")
_DASHES = re.compile(r"[\u2010-\u2015]")
_WHITESPACE = re.compile(r"\s+")
_LETTERS = re.compile(r"[A-Za-z]")


def split_lines(text: str | None) -> Iterator[tuple[int, str]]:
    """
    Split raw input into candidate references.

    Lines may end in CRLF, LF or CR. Within a line, ";" and "," separate
    further references. Blank pieces are dropped.

    Args:
        text: Raw reference text (pasted or read from a file)

    Yields:
        (line_number, candidate) pairs with 1-based physical line numbers
    """
    if not text:
        return

    for line_number, line in enumerate(_LINE_BREAK.split(text), start=1):
        for piece in _INLINE_SEPARATOR.split(line):
            candidate = piece.strip()
            if candidate:
                yield line_number, candidate


def split_book(line: str) -> tuple[str, str]:
    """
    Split a reference into its book token and the chapter/verse remainder.

    Raises:
        UnknownBook: If the line does not start with a book name
    """
    match = _BOOK.match(line)
    if not match:
        raise UnknownBook(f"Missing book name in {line!r}", line=line)
    return match.group(1).strip(), match.group(2)


def parse_reference(line: str, index: BookIndex | None = None) -> PassageExpression:
    """
    Parse one reference such as "1Jn2:3" or "Jeremiah 30:3-34:4".

    Only the shape of the chapter/verse part is validated here. Whether the
    numbers exist in the book is checked during expansion.

    Args:
        line: A single candidate reference
        index: Book index to resolve names against (defaults to the bundled canon)

    Returns:
        The parsed passage expression

    Raises:
        UnknownBook: If the book cannot be resolved
        MalformedRange: If the chapter/verse part is not a recognized shape
    """
    if index is None:
        index = get_default_index()

    book_token, remainder = split_book(line)
    try:
        book = index.resolve_book_name(book_token)
    except UnknownBook as e:
        e.line = line
        raise

    numbers = _DASHES.sub("-", _WHITESPACE.sub("", remainder))
    if not numbers:
        raise MalformedRange(f"Missing chapter number in {line!r}", line=line)

    parts = numbers.split("-")
    if len(parts) > 2:
        raise MalformedRange(f"Too many '-' separators in {line!r}", line=line)
    if len(parts) == 2 and _LETTERS.search(parts[1]):
        if _names_book(parts[1], book, index):
            raise MalformedRange(
                f"Range end must not repeat the book name: {line!r}", line=line
            )
        raise MalformedRange(f"Ranges across books are not supported: {line!r}", line=line)

    start_chapter, start_verse = _parse_point(parts[0], line)
    if len(parts) == 1:
        if start_verse is None:
            return WholeChapter(book, start_chapter)
        return SingleVerse(book, start_chapter, start_verse)

    end_first, end_second = _parse_point(parts[1], line)

    if start_verse is None:
        if end_second is not None:
            raise MalformedRange(
                f"Chapter range must not end in a verse: {line!r}", line=line
            )
        if end_first < start_chapter:
            raise MalformedRange(f"Range ends before it starts: {line!r}", line=line)
        return ChapterRange(book, start_chapter, end_first)

    if end_second is None:
        # C:V-V2
        if end_first < start_verse:
            raise MalformedRange(f"Range ends before it starts: {line!r}", line=line)
        return SameChapterRange(book, start_chapter, start_verse, end_first)

    if (end_first, end_second) < (start_chapter, start_verse):
        raise MalformedRange(f"Range ends before it starts: {line!r}", line=line)
    return CrossRange(book, start_chapter, start_verse, end_first, end_second)


def _parse_point(text: str, line: str) -> tuple[int, int | None]:
    match = _POINT.match(text)
    if not match:
        raise MalformedRange(
            f"Expected 'chapter' or 'chapter:verse' but found {text!r} in {line!r}", line=line
        )
    verse = match.group(2)
    return int(match.group(1)), int(verse) if verse is not None else None


def _names_book(text: str, book: CanonicalBook, index: BookIndex) -> bool:
    match = _BOOK.match(text)
    if not match:
        return False
    try:
        return index.resolve_book_name(match.group(1)) == book
    except UnknownBook:
        return False

"""Expand passage expressions into verses and merge them across lines."""

from typing import Iterable

from .books import BookIndex, CanonicalBook, get_default_index
from .errors import VerseOutOfRange
from .passages import (
    ChapterRange,
    CrossRange,
    PassageExpression,
    SameChapterRange,
    SingleVerse,
    VerseId,
    WholeChapter,
)


def expand_passage(expression: PassageExpression, index: BookIndex | None = None) -> list[VerseId]:
    """
    Expand a passage expression into concrete verses.

    Every chapter the expression touches is checked against the book's
    metadata, so a cross-chapter range never runs past the real end of a
    chapter.

    Args:
        expression: Parsed passage
        index: Book index providing verse counts (defaults to the bundled canon)

    Returns:
        Verses in ascending order

    Raises:
        VerseOutOfRange: If a chapter or verse does not exist in the book
    """
    if index is None:
        index = get_default_index()

    book = expression.book

    if isinstance(expression, SingleVerse):
        _check_verse(index, book, expression.chapter, expression.verse)
        return [VerseId(book.ordinal, expression.chapter, expression.verse)]

    if isinstance(expression, WholeChapter):
        return _verses(book, expression.chapter, 1, index.verse_count(book, expression.chapter))

    if isinstance(expression, SameChapterRange):
        _check_verse(index, book, expression.chapter, expression.start_verse)
        _check_verse(index, book, expression.chapter, expression.end_verse)
        return _verses(book, expression.chapter, expression.start_verse, expression.end_verse)

    if isinstance(expression, CrossRange):
        _check_verse(index, book, expression.start_chapter, expression.start_verse)
        _check_verse(index, book, expression.end_chapter, expression.end_verse)
        verses = []
        for chapter in range(expression.start_chapter, expression.end_chapter + 1):
            first = expression.start_verse if chapter == expression.start_chapter else 1
            if chapter == expression.end_chapter:
                last = expression.end_verse
            else:
                last = index.verse_count(book, chapter)
            verses.extend(_verses(book, chapter, first, last))
        return verses

    if isinstance(expression, ChapterRange):
        index.verse_count(book, expression.start_chapter)
        index.verse_count(book, expression.end_chapter)
        verses = []
        for chapter in range(expression.start_chapter, expression.end_chapter + 1):
            verses.extend(_verses(book, chapter, 1, index.verse_count(book, chapter)))
        return verses

    raise TypeError(f"Unsupported passage expression: {expression!r}")


def merge_verses(expansions: Iterable[Iterable[VerseId]]) -> list[VerseId]:
    """
    Concatenate expansions in order and drop repeated verses.

    Each verse keeps the position of its first occurrence; no reordering to
    canonical order happens here.
    """
    merged: dict[VerseId, None] = {}
    for verses in expansions:
        for verse in verses:
            merged.setdefault(verse, None)
    return list(merged)


def _check_verse(index: BookIndex, book: CanonicalBook, chapter: int, verse: int) -> None:
    count = index.verse_count(book, chapter)
    if verse < 1 or verse > count:
        raise VerseOutOfRange(
            f"{book.name} {chapter} has {count} verses, verse {verse} does not exist"
        )


def _verses(book: CanonicalBook, chapter: int, first: int, last: int) -> list[VerseId]:
    return [VerseId(book.ordinal, chapter, verse) for verse in range(first, last + 1)]

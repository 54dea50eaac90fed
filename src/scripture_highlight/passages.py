"""Verse identities and parsed passage expressions."""

from dataclasses import dataclass
from typing import Union

from .books import CanonicalBook


@dataclass(frozen=True, order=True)
class VerseId:
    """A single verse, ordered by (book ordinal, chapter, verse)."""

    book: int
    chapter: int
    verse: int


@dataclass(frozen=True)
class SingleVerse:
    """A reference like "John 3:16"."""

    book: CanonicalBook
    chapter: int
    verse: int


@dataclass(frozen=True)
class WholeChapter:
    """A reference like "Romans 11"."""

    book: CanonicalBook
    chapter: int


@dataclass(frozen=True)
class SameChapterRange:
    """A reference like "John 3:16-18"."""

    book: CanonicalBook
    chapter: int
    start_verse: int
    end_verse: int


@dataclass(frozen=True)
class CrossRange:
    """A reference like "Jeremiah 30:3-34:4"."""

    book: CanonicalBook
    start_chapter: int
    start_verse: int
    end_chapter: int
    end_verse: int


@dataclass(frozen=True)
class ChapterRange:
    """A reference like "Genesis 1-3" covering every verse of each chapter."""

    book: CanonicalBook
    start_chapter: int
    end_chapter: int


PassageExpression = Union[SingleVerse, WholeChapter, SameChapterRange, CrossRange, ChapterRange]

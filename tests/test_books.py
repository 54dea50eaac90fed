"""Tests for the canonical book index."""

import pytest

from scripture_highlight.books import (
    BookIndex,
    CanonicalBook,
    get_default_index,
    normalize_book_name,
)
from scripture_highlight.errors import BookIndexError, UnknownBook, VerseOutOfRange
from scripture_highlight.passages import VerseId


class TestNormalizeBookName:
    """Tests for normalize_book_name."""

    def test_lowercases_and_strips_spaces(self):
        assert normalize_book_name("1 John") == "1john"

    def test_strips_periods_and_hyphens(self):
        assert normalize_book_name("1-Sam.") == "1sam"
        assert normalize_book_name("Song of Solomon") == "songofsolomon"


class TestDefaultIndex:
    """Tests for the bundled index."""

    def test_has_sixty_six_books(self, index):
        assert len(index) == 66

    def test_books_in_canonical_order(self, index):
        books = list(index)
        assert books[0].name == "Genesis"
        assert books[39].name == "Matthew"
        assert books[-1].name == "Revelation"
        assert [book.ordinal for book in books] == list(range(1, 67))

    def test_total_verse_count(self, index):
        assert sum(sum(book.verse_counts) for book in index) == 31102

    def test_same_instance_every_call(self):
        assert get_default_index() is get_default_index()

    def test_chapter_and_verse_counts(self, index):
        psalms = index.lookup_alias("Psalms")
        assert index.chapter_count(psalms) == 150
        assert index.verse_count(psalms, 119) == 176
        assert index.verse_count(index.lookup_alias("John"), 3) == 36

    def test_verse_count_invalid_chapter(self, index):
        john = index.lookup_alias("John")
        with pytest.raises(VerseOutOfRange):
            index.verse_count(john, 22)
        with pytest.raises(VerseOutOfRange):
            index.verse_count(john, 0)

    def test_format_reference(self, index, john_3_16):
        assert index.format_reference(john_3_16) == "John 3:16"
        assert index.format_reference(VerseId(62, 2, 3)) == "1 John 2:3"

    def test_book_by_ordinal(self, index):
        assert index.book(44).name == "Acts"
        with pytest.raises(UnknownBook):
            index.book(67)


class TestLookupAlias:
    """Tests for exact alias lookup."""

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("Acts", "Acts"),
            ("Ac", "Acts"),
            ("1Jn", "1 John"),
            ("1 John", "1 John"),
            ("I John", "1 John"),
            ("Jn", "John"),
            ("ROM", "Romans"),
            ("song of songs", "Song of Solomon"),
        ],
    )
    def test_known_aliases(self, index, alias, expected):
        assert index.lookup_alias(alias).name == expected

    def test_unknown_alias(self, index):
        with pytest.raises(UnknownBook):
            index.lookup_alias("Jerem")


class TestResolveBookName:
    """Tests for tolerant book name resolution."""

    def test_exact_match_preferred(self, index):
        assert index.resolve_book_name("Jude").name == "Jude"
        assert index.resolve_book_name("Judges").name == "Judges"

    def test_numeric_prefix_is_a_different_book(self, index):
        assert index.resolve_book_name("1Jn").name == "1 John"
        assert index.resolve_book_name("Jn").name == "John"

    def test_longest_alias_prefix_wins(self, index):
        assert index.resolve_book_name("Revelations").name == "Revelation"
        assert index.resolve_book_name("Jerem").name == "Jeremiah"

    def test_abbreviation_of_a_longer_alias(self):
        genesis = CanonicalBook(1, "Genesis", (3, 2))
        small = BookIndex([genesis])
        assert small.resolve_book_name("Gene") == genesis

    def test_ambiguous_abbreviation(self, index):
        with pytest.raises(UnknownBook, match="Ambiguous"):
            index.resolve_book_name("Jo")

    def test_bare_name_of_numbered_books_is_ambiguous(self, index):
        with pytest.raises(UnknownBook, match="1 Timothy, 2 Timothy"):
            index.resolve_book_name("Timothy")
        with pytest.raises(UnknownBook, match="1 Corinthians, 2 Corinthians"):
            index.resolve_book_name("Corinthians")

    def test_short_name_of_numbered_books_is_ambiguous(self, index):
        for token in ("Tim", "Corinth", "Thess", "Samuel", "Kings", "Peter"):
            with pytest.raises(UnknownBook, match="Ambiguous"):
                index.resolve_book_name(token)

    def test_single_unnumbered_match_wins(self, index):
        assert index.resolve_book_name("Jh").name == "John"

    def test_unknown_book(self, index):
        with pytest.raises(UnknownBook):
            index.resolve_book_name("Bob")

    def test_empty_name(self, index):
        with pytest.raises(UnknownBook):
            index.resolve_book_name("  ")


class TestBookIndexConstruction:
    """Tests for BookIndex validation."""

    def test_duplicate_alias_for_different_books(self):
        john = CanonicalBook(1, "John", (3,))
        jonah = CanonicalBook(2, "Jonah", (4,))
        with pytest.raises(BookIndexError, match="claimed by both"):
            BookIndex([john, jonah], [("jn", john), ("J.N.", jonah)])

    def test_repeated_alias_for_same_book_is_fine(self):
        john = CanonicalBook(1, "John", (3,))
        index = BookIndex([john], [("jn", john), ("JN", john)])
        assert index.lookup_alias("jn") == john

    def test_book_without_chapters(self):
        with pytest.raises(BookIndexError, match="no chapters"):
            BookIndex([CanonicalBook(1, "Empty", ())])

    def test_chapter_without_verses(self):
        with pytest.raises(BookIndexError):
            BookIndex([CanonicalBook(1, "Broken", (3, 0))])

    def test_duplicate_ordinal(self):
        with pytest.raises(BookIndexError, match="ordinal"):
            BookIndex([CanonicalBook(1, "A", (1,)), CanonicalBook(1, "B", (1,))])

    def test_alias_for_book_not_in_index(self):
        stray = CanonicalBook(9, "Stray", (1,))
        with pytest.raises(BookIndexError):
            BookIndex([CanonicalBook(1, "A", (1,))], [("st", stray)])

    def test_from_table_assigns_ordinals(self):
        index = BookIndex.from_table((("Alpha", ("al",), (2,)), ("Beta", ("be",), (1, 1))))
        assert index.lookup_alias("be").ordinal == 2
        assert index.lookup_alias("alpha").verse_counts == (2,)

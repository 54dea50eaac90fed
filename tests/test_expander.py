"""Tests for passage expansion and merging."""

import pytest

from scripture_highlight.errors import VerseOutOfRange
from scripture_highlight.expander import expand_passage, merge_verses
from scripture_highlight.parser import parse_reference
from scripture_highlight.passages import (
    ChapterRange,
    CrossRange,
    SameChapterRange,
    SingleVerse,
    VerseId,
    WholeChapter,
)


def expand(line, index):
    return expand_passage(parse_reference(line, index), index)


class TestVerseId:
    """Tests for VerseId ordering."""

    def test_lexicographic_order(self):
        assert VerseId(1, 50, 26) < VerseId(2, 1, 1)
        assert VerseId(43, 3, 16) < VerseId(43, 4, 1)
        assert VerseId(43, 3, 9) < VerseId(43, 3, 10)

    def test_hashable_and_equal(self):
        assert {VerseId(43, 3, 16), VerseId(43, 3, 16)} == {VerseId(43, 3, 16)}


class TestExpandPassage:
    """Tests for expand_passage."""

    def test_single_verse(self, index):
        john = index.lookup_alias("John")
        assert expand_passage(SingleVerse(john, 3, 16), index) == [VerseId(43, 3, 16)]

    def test_single_verse_alias_equivalence(self, index):
        assert expand("Acts 1:12", index) == expand("Ac1:12", index) == [VerseId(44, 1, 12)]

    def test_numeric_prefixed_books_stay_distinct(self, index):
        assert expand("1Jn2:3", index) == [VerseId(62, 2, 3)]
        assert expand("Jn2:3", index) == [VerseId(43, 2, 3)]

    def test_whole_chapter(self, index):
        romans = index.lookup_alias("Romans")
        verses = expand_passage(WholeChapter(romans, 11), index)
        count = index.verse_count(romans, 11)
        assert verses == [VerseId(45, 11, v) for v in range(1, count + 1)]
        assert len(verses) == 36

    def test_same_chapter_range_length(self, index):
        john = index.lookup_alias("John")
        verses = expand_passage(SameChapterRange(john, 3, 16, 21), index)
        assert len(verses) == 21 - 16 + 1
        assert verses[0] == VerseId(43, 3, 16)
        assert verses[-1] == VerseId(43, 3, 21)

    def test_cross_chapter_range(self, index):
        jeremiah = index.lookup_alias("Jeremiah")
        verses = expand_passage(CrossRange(jeremiah, 30, 3, 34, 4), index)

        assert verses[0] == VerseId(24, 30, 3)
        assert verses[-1] == VerseId(24, 34, 4)
        assert verses == sorted(verses)
        assert len(set(verses)) == len(verses)

        expected = (index.verse_count(jeremiah, 30) - 3 + 1) + 4
        expected += sum(index.verse_count(jeremiah, c) for c in (31, 32, 33))
        assert len(verses) == expected == 136

        for chapter in (31, 32, 33):
            in_chapter = [v.verse for v in verses if v.chapter == chapter]
            assert in_chapter == list(range(1, index.verse_count(jeremiah, chapter) + 1))

    def test_cross_range_within_one_chapter(self, index):
        john = index.lookup_alias("John")
        assert expand_passage(CrossRange(john, 3, 16, 3, 18), index) == expand(
            "John 3:16-18", index
        )

    def test_chapter_range(self, index):
        genesis = index.lookup_alias("Genesis")
        verses = expand_passage(ChapterRange(genesis, 1, 3), index)
        assert len(verses) == 31 + 25 + 24
        assert verses[31] == VerseId(1, 2, 1)

    def test_last_verse_of_chapter_is_valid(self, index):
        assert expand("Psalm 119:176", index) == [VerseId(19, 119, 176)]


class TestExpandPassageOutOfRange:
    """Tests for bounds checking during expansion."""

    @pytest.mark.parametrize(
        "line",
        [
            "John 3:37",
            "John 22:1",
            "John 22",
            "John 0:1",
            "John 3:0",
            "John 3:30-40",
            "Jeremiah 30:3-53:1",
            "Jeremiah 30:25-31:1",
            "Genesis 49-51",
            "Jude 2",
        ],
    )
    def test_out_of_range(self, index, line):
        with pytest.raises(VerseOutOfRange):
            expand(line, index)

    def test_message_names_the_limit(self, index):
        with pytest.raises(VerseOutOfRange, match="36 verses"):
            expand("John 3:37", index)


class TestMergeVerses:
    """Tests for merge_verses."""

    def test_keeps_first_occurrence_order(self):
        a, b, c = VerseId(43, 3, 16), VerseId(43, 3, 17), VerseId(1, 1, 1)
        assert merge_verses([[a, b], [c, a], [b]]) == [a, b, c]

    def test_no_canonical_reordering(self):
        later, earlier = VerseId(66, 22, 21), VerseId(1, 1, 1)
        assert merge_verses([[later], [earlier]]) == [later, earlier]

    def test_overlapping_ranges(self, index):
        merged = merge_verses([expand("John 3:16-18", index), expand("John 3:17-20", index)])
        assert merged == [VerseId(43, 3, v) for v in range(16, 21)]

    def test_empty(self):
        assert merge_verses([]) == []

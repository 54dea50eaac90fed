"""Shared pytest fixtures for scripture-highlight tests."""

import pytest

from scripture_highlight.books import get_default_index
from scripture_highlight.highlights import BoundingBox
from scripture_highlight.passages import VerseId


class FakeLayout:
    """Page layout stub backed by plain dictionaries."""

    def __init__(self, boxes=None, texts=None):
        self.boxes = dict(boxes or {})
        self.texts = dict(texts or {})
        self.located = []

    def locate(self, verse):
        self.located.append(verse)
        return self.boxes.get(verse)

    def verse_text(self, verse):
        return self.texts.get(verse)


@pytest.fixture
def index():
    """The bundled canonical book index."""
    return get_default_index()


@pytest.fixture
def john_3_16():
    return VerseId(43, 3, 16)


@pytest.fixture
def fake_layout():
    """A layout that knows John 3:16-17 and Romans 1:1 only."""
    return FakeLayout(
        boxes={
            VerseId(43, 3, 16): BoundingBox(10, 20, 40, 7),
            VerseId(43, 3, 17): BoundingBox(10, 26, 40, 7),
            VerseId(45, 1, 1): BoundingBox(80, 20, 36, 7),
        },
        texts={
            VerseId(43, 3, 16): "For God so loved the world,",
            VerseId(45, 1, 1): "Paul, a servant of Jesus Christ,",
        },
    )


@pytest.fixture
def sample_scripture_content():
    """Sample scripture text content for testing."""
    return """RTH 1:0 Ruth and Naomi

RTH 1:1 Now it came to pass in the days when the judges ruled, that there was a famine in the land.

RTH 1:2 And the name of the man was Elimelech, and the name of his wife Naomi.

RTH 1:3 And Elimelech Naomi's husband died; and she was left, and her two sons.

JON 1:0 Jonah Sent to Nineveh

JON 1:1 Now the word of the LORD came unto Jonah the son of Amittai, saying,

JON 1:2 Arise, go to Nineveh, that great city, and cry against it; for their wickedness is come up before me.
"""


@pytest.fixture
def sample_contents_txt():
    """Sample Contents.txt content for testing."""
    return """               TABLE OF CONTENTS I
             In order of appearance

                      BIBLE

Preface   . . . . . . . . . . . . . . . . .   PRE
Genesis   . . . . . . . . . . . . . . . . .   GEN
Exodus    . . . . . . . . . . . . . . . . .   EXO
Ruth  . . . . . . . . . . . . . . . . . . .   RTH
1-Samuel  . . . . . . . . . . . . . . . . .   SA1
Song-of-Solomon . . . . . . . . . . . . . .   SON
Doctrine-and-Covenants  . . . . . . . . . .   D&C
Jonah . . . . . . . . . . . . . . . . . . .   JON
"""


@pytest.fixture
def temp_scripture_file(tmp_path, sample_scripture_content):
    """Create a temporary scripture file for testing."""
    scripture_file = tmp_path / "test_scripture.txt"
    scripture_file.write_text(sample_scripture_content, encoding="utf-8")
    return scripture_file


@pytest.fixture
def temp_contents_file(tmp_path, sample_contents_txt):
    """Create a temporary Contents.txt file for testing."""
    contents_file = tmp_path / "Contents.txt"
    contents_file.write_text(sample_contents_txt, encoding="utf-8")
    return contents_file


@pytest.fixture
def sample_mapping(index):
    """Abbreviation -> canonical book mapping matching the sample files."""
    return {
        "GEN": index.lookup_alias("Genesis"),
        "RTH": index.lookup_alias("Ruth"),
        "JON": index.lookup_alias("Jonah"),
    }


@pytest.fixture
def temp_assets_directory(tmp_path, sample_scripture_content):
    """Create a temporary assets directory structure for testing."""
    assets_dir = tmp_path / "assets"
    assets_dir.mkdir()

    contents = """Genesis   . . . . . . . . . . . . . . . . .   GEN
Ruth  . . . . . . . . . . . . . . . . . . .   RTH
Jonah . . . . . . . . . . . . . . . . . . .   JON
"""
    (assets_dir / "Contents.txt").write_text(contents, encoding="utf-8")

    bible_dir = assets_dir / "bible"
    bible_dir.mkdir()
    (bible_dir / "08.ruth.txt").write_text(sample_scripture_content, encoding="utf-8")
    (bible_dir / "32.jonah.txt").write_text(
        "JON 1:3 But Jonah rose up to flee unto Tarshish from the presence of the LORD,\n",
        encoding="utf-8",
    )

    return assets_dir

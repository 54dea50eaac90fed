"""Canonical book index with alias resolution and chapter/verse metadata."""

import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator

from .canon import BOOKS
from .errors import BookIndexError, UnknownBook, VerseOutOfRange

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_book_name(name: str) -> str:
    """Lowercase a book name and drop everything but letters and digits."""
    return _NON_ALNUM.sub("", name.lower())


def _ordinal(book) -> int:
    return book.ordinal


@dataclass(frozen=True)
class CanonicalBook:
    """A book of the canon with its verse count for every chapter."""

    ordinal: int
    name: str
    verse_counts: tuple[int, ...]

    @property
    def chapter_count(self) -> int:
        return len(self.verse_counts)


class BookIndex:
    """Read-only lookup table of canonical books and their aliases."""

    def __init__(
        self,
        books: Iterable[CanonicalBook],
        aliases: Iterable[tuple[str, CanonicalBook]] = (),
    ):
        """
        Build and validate the index.

        Args:
            books: Canonical books. Each book's own name is registered as an alias.
            aliases: Extra (alias, book) pairs. Aliases are normalized before use.

        Raises:
            BookIndexError: If ordinals repeat, metadata is malformed, or two
                different books claim the same normalized alias
        """
        ordered = sorted(books, key=lambda book: book.ordinal)
        by_ordinal: dict[int, CanonicalBook] = {}
        alias_map: dict[str, CanonicalBook] = {}

        for book in ordered:
            if book.ordinal in by_ordinal:
                raise BookIndexError(f"Duplicate book ordinal {book.ordinal}: {book.name}")
            if not book.verse_counts:
                raise BookIndexError(f"Book {book.name} has no chapters")
            if any(count < 1 for count in book.verse_counts):
                raise BookIndexError(f"Book {book.name} has a chapter with no verses")
            by_ordinal[book.ordinal] = book

        for alias, book in [(book.name, book) for book in ordered] + list(aliases):
            if book.ordinal not in by_ordinal:
                raise BookIndexError(f"Alias {alias!r} refers to unknown book {book.name}")
            key = normalize_book_name(alias)
            if not key:
                raise BookIndexError(f"Empty alias for book {book.name}")
            existing = alias_map.get(key)
            if existing is not None and existing != book:
                raise BookIndexError(
                    f"Alias {alias!r} is claimed by both {existing.name} and {book.name}"
                )
            alias_map[key] = book

        # "1cor" -> "cor", "2timothy" -> "timothy"
        numbered_bases = {
            (key.lstrip("123"), book)
            for key, book in alias_map.items()
            if key[0] in "123" and key.lstrip("123")
        }

        self._books = tuple(ordered)
        self._numbered_bases = tuple(numbered_bases)
        self._by_ordinal = MappingProxyType(by_ordinal)
        self._aliases = MappingProxyType(alias_map)

    @classmethod
    def from_table(cls, table=BOOKS) -> "BookIndex":
        """Build an index from (name, aliases, verse counts) rows in canonical order."""
        books = []
        aliases = []
        for ordinal, (name, book_aliases, verse_counts) in enumerate(table, start=1):
            book = CanonicalBook(ordinal=ordinal, name=name, verse_counts=tuple(verse_counts))
            books.append(book)
            aliases.extend((alias, book) for alias in book_aliases)
        return cls(books, aliases)

    def __iter__(self) -> Iterator[CanonicalBook]:
        return iter(self._books)

    def __len__(self) -> int:
        return len(self._books)

    @property
    def aliases(self):
        """Normalized alias -> book mapping (read-only)."""
        return self._aliases

    def book(self, ordinal: int) -> CanonicalBook:
        """Get a book by its ordinal."""
        try:
            return self._by_ordinal[ordinal]
        except KeyError:
            raise UnknownBook(f"No book with ordinal {ordinal}") from None

    def lookup_alias(self, token: str) -> CanonicalBook:
        """
        Look up a book by exact (normalized) alias.

        Raises:
            UnknownBook: If no alias matches
        """
        book = self._aliases.get(normalize_book_name(token))
        if book is None:
            raise UnknownBook(f"Unknown book: {token.strip()!r}")
        return book

    def resolve_book_name(self, token: str) -> CanonicalBook:
        """
        Resolve a possibly abbreviated or misspelled book name.

        Exact alias matches win. A bare name shared by numbered books
        ("Timothy", "Cor") is ambiguous unless exactly one other book also
        matches it. Otherwise the longest alias that the token
        starts with is used ("Revelations" -> "revelation"). Failing that, the
        token is treated as an abbreviation of longer aliases, which must all
        belong to the same book ("Jerem" -> Jeremiah, while "Jo" could be Job,
        Joel, John or Jonah).

        Raises:
            UnknownBook: If nothing matches or the abbreviation is ambiguous
        """
        key = normalize_book_name(token)
        if not key:
            raise UnknownBook(f"Missing book name in {token!r}")

        book = self._aliases.get(key)
        if book is not None:
            return book

        numbered = {book for base, book in self._numbered_bases if base.startswith(key)}
        if numbered:
            unnumbered = {
                book
                for alias, book in self._aliases.items()
                if alias.startswith(key) and book not in numbered
            }
            if len(unnumbered) == 1:
                return unnumbered.pop()
            names = ", ".join(book.name for book in sorted(numbered | unnumbered, key=_ordinal))
            raise UnknownBook(f"Ambiguous book {token.strip()!r} (could be {names})")

        prefixes = [alias for alias in self._aliases if key.startswith(alias)]
        if prefixes:
            return self._aliases[max(prefixes, key=len)]

        extensions = {self._aliases[alias] for alias in self._aliases if alias.startswith(key)}
        if len(extensions) == 1:
            return extensions.pop()
        if extensions:
            names = ", ".join(sorted(book.name for book in extensions))
            raise UnknownBook(f"Ambiguous book {token.strip()!r} (could be {names})")

        raise UnknownBook(f"Unknown book: {token.strip()!r}")

    def chapter_count(self, book: CanonicalBook) -> int:
        return book.chapter_count

    def verse_count(self, book: CanonicalBook, chapter: int) -> int:
        """
        Number of verses in a chapter.

        Raises:
            VerseOutOfRange: If the chapter does not exist in the book
        """
        if chapter < 1 or chapter > book.chapter_count:
            raise VerseOutOfRange(
                f"{book.name} has {book.chapter_count} chapters, chapter {chapter} does not exist"
            )
        return book.verse_counts[chapter - 1]

    def format_reference(self, verse_id) -> str:
        """Display form of a verse, e.g. "John 3:16"."""
        book = self.book(verse_id.book)
        return f"{book.name} {verse_id.chapter}:{verse_id.verse}"


@lru_cache(maxsize=None)
def get_default_index() -> BookIndex:
    """
    Get the process-wide index built from the bundled canon table.

    Returns:
        The same BookIndex instance on every call
    """
    return BookIndex.from_table(BOOKS)

"""Resolve whole submissions of reference text into a deduplicated verse list."""

from dataclasses import dataclass, field

from .books import BookIndex, get_default_index
from .errors import NoReferencesResolved, ReferenceResolutionError
from .expander import expand_passage, merge_verses
from .parser import parse_reference, split_lines
from .passages import VerseId


@dataclass
class LineError:
    """A reference line that could not be resolved."""

    source: str
    line_number: int
    text: str
    kind: str
    message: str

    def __str__(self) -> str:
        return f"{self.source} line {self.line_number}: {self.kind}: {self.message}"


@dataclass
class Resolution:
    """Verses resolved from a submission plus the lines that failed."""

    verses: list[VerseId]
    references: list[str]
    errors: list[LineError] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [str(error) for error in self.errors]


def resolve_references(*texts, index: BookIndex | None = None) -> Resolution:
    """
    Resolve one or more blocks of reference text.

    Each block is split into lines and every line is resolved independently:
    a line that fails is recorded in ``errors`` and the rest carry on. Verses
    from all blocks are merged in input order with duplicates removed.

    Args:
        *texts: Blocks of text, either plain strings or (source_label, text)
                pairs. Plain strings are labelled "input", "input 2", ...
        index: Book index to resolve against (defaults to the bundled canon)

    Returns:
        Resolution with the merged verses, their display strings and errors

    Raises:
        NoReferencesResolved: If no line produced any verse
    """
    if index is None:
        index = get_default_index()

    expansions = []
    errors = []

    for position, block in enumerate(texts, start=1):
        if isinstance(block, tuple):
            source, text = block
        else:
            source, text = ("input" if position == 1 else f"input {position}"), block

        for line_number, line in split_lines(text):
            try:
                expression = parse_reference(line, index)
                expansions.append(expand_passage(expression, index))
            except ReferenceResolutionError as e:
                errors.append(
                    LineError(
                        source=source,
                        line_number=line_number,
                        text=line,
                        kind=e.kind,
                        message=e.message,
                    )
                )

    verses = merge_verses(expansions)
    if not verses:
        raise NoReferencesResolved(errors)

    return Resolution(
        verses=verses,
        references=[index.format_reference(verse) for verse in verses],
        errors=errors,
    )

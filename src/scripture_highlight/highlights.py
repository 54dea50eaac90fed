"""Bind resolved verses to highlight boxes on a rendered page."""

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from .books import BookIndex, get_default_index
from .passages import VerseId

MISSING_TEXT = "Reference not found in loaded Bible dataset."


@dataclass(frozen=True)
class BoundingBox:
    """Pixel rectangle on the rendered page."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class HighlightRegion:
    """A verse placed on the page."""

    verse: VerseId
    reference: str
    text: str
    box: BoundingBox

    def to_dict(self) -> dict:
        return {
            "verse": self.reference,
            "text": self.text,
            "x": self.box.x,
            "y": self.box.y,
            "width": self.box.width,
            "height": self.box.height,
        }


class PageLayout(Protocol):
    """What the page renderer exposes about where verses ended up."""

    def locate(self, verse: VerseId) -> BoundingBox | None:
        """Box for a verse, or None if the verse was not rendered."""
        ...

    def verse_text(self, verse: VerseId) -> str | None:
        """Display text for a verse, or None if unknown."""
        ...


@dataclass
class BindingResult:
    highlights: list[HighlightRegion]
    warnings: list[str] = field(default_factory=list)


def bind_highlights(
    verses: Iterable[VerseId], layout: PageLayout, index: BookIndex | None = None
) -> BindingResult:
    """
    Look up every verse on the rendered page.

    Verses the layout cannot place are left out of the highlights and
    reported as warnings; they never fail the request.

    Args:
        verses: Resolved verses in display order
        layout: Page layout to query
        index: Book index used for display strings (defaults to the bundled canon)

    Returns:
        BindingResult with highlights in input order and one warning per miss
    """
    if index is None:
        index = get_default_index()

    highlights = []
    warnings = []
    for verse in verses:
        reference = index.format_reference(verse)
        box = layout.locate(verse)
        if box is None:
            warnings.append(f"verse {reference} not found on rendered page")
            continue
        text = layout.verse_text(verse)
        highlights.append(
            HighlightRegion(
                verse=verse,
                reference=reference,
                text=text if text is not None else MISSING_TEXT,
                box=box,
            )
        )

    return BindingResult(highlights=highlights, warnings=warnings)

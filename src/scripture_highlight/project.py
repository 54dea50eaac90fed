"""Assemble project records from a submission of reference text."""

import json
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .books import BookIndex, get_default_index
from .downloader import ensure_assets_downloaded
from .highlights import HighlightRegion, PageLayout, bind_highlights
from .layout import GridLayout
from .resolver import resolve_references
from .texts import VerseTextStore

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


@dataclass
class Submission:
    """Reference text submitted for a new project."""

    name: str
    output_path: str
    file_text: str | None = None
    pasted_text: str | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Project name must not be blank")
        if not self.output_path or not self.output_path.strip():
            raise ValueError("Output path must not be blank")


@dataclass(frozen=True)
class ProjectRecord:
    """A saved highlight project."""

    id: str
    name: str
    output_path: str
    image_path: str
    created_at: str
    references: tuple[str, ...]
    highlights: tuple[HighlightRegion, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "outputPath": self.output_path,
            "imagePath": self.image_path,
            "createdAt": self.created_at,
            "references": list(self.references),
            "highlights": [region.to_dict() for region in self.highlights],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass
class ProjectResult:
    """A new record plus everything that went wrong along the way."""

    record: ProjectRecord
    warnings: list[str] = field(default_factory=list)


def image_path_for(output_path: str, name: str) -> str:
    """Absolute path of the image a project renders to."""
    filename = _UNSAFE_FILENAME_CHARS.sub("_", name) + ".png"
    return str((Path(output_path) / filename).absolute())


class ProjectBuilder:
    """Turns submissions into project records against one page layout."""

    def __init__(self, index: BookIndex | None = None, layout: PageLayout | None = None):
        """
        Initialize the builder.

        Args:
            index: Book index (defaults to the bundled canon)
            layout: Page layout to bind highlights against. Defaults to a grid
                    layout of every verse in the index, without verse text
        """
        self.index = index or get_default_index()
        self.layout = layout if layout is not None else GridLayout.from_index(self.index)

    @classmethod
    def from_assets(
        cls, assets_dir: str | Path | None = None, download: bool = True
    ) -> "ProjectBuilder":
        """
        Build a builder whose layout carries verse text from the asset files.

        Args:
            assets_dir: Assets directory (see downloader.default_assets_dir)
            download: Fetch the assets first if they are missing
        """
        if download:
            assets_dir = ensure_assets_downloaded(assets_dir)
        elif assets_dir is None:
            raise ValueError("assets_dir is required when download is disabled")

        index = get_default_index()
        print(f"Loading verse text from {assets_dir}...")
        texts = VerseTextStore.from_assets(assets_dir, index)
        print(f"Loaded {len(texts)} verses")

        return cls(index=index, layout=GridLayout.from_texts(texts, index))

    def build(self, submission: Submission) -> ProjectResult:
        """
        Resolve a submission and bind it to the page.

        The uploaded file content and the pasted text are resolved as separate
        sources and merged, file first.

        Returns:
            ProjectResult with the record and all non-fatal warnings

        Raises:
            NoReferencesResolved: If nothing in the submission resolved
        """
        sources = []
        if submission.file_text:
            sources.append(("file", submission.file_text))
        if submission.pasted_text:
            sources.append(("text", submission.pasted_text))

        resolution = resolve_references(*sources, index=self.index)
        binding = bind_highlights(resolution.verses, self.layout, self.index)

        record = ProjectRecord(
            id=str(uuid.uuid4()),
            name=submission.name,
            output_path=submission.output_path,
            image_path=image_path_for(submission.output_path, submission.name),
            created_at=datetime.now(timezone.utc).isoformat(),
            references=tuple(resolution.references),
            highlights=tuple(binding.highlights),
        )
        return ProjectResult(record=record, warnings=resolution.warnings + binding.warnings)

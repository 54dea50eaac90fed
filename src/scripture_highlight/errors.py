"""Exceptions raised while resolving scripture references."""


class BookIndexError(Exception):
    """Raised when the canonical book table is inconsistent. Fatal at startup."""


class ReferenceResolutionError(Exception):
    """Base class for failures that affect a single reference line."""

    kind = "ReferenceResolutionError"

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.message = message
        self.line = line


class UnknownBook(ReferenceResolutionError):
    """The book name or abbreviation did not match any known book."""

    kind = "UnknownBook"


class MalformedRange(ReferenceResolutionError):
    """The chapter/verse part of a reference does not have a valid shape."""

    kind = "MalformedRange"


class VerseOutOfRange(ReferenceResolutionError):
    """A chapter or verse number exceeds what the book contains."""

    kind = "VerseOutOfRange"


class NoReferencesResolved(Exception):
    """Raised when a submission produced no verses at all."""

    def __init__(self, errors=None):
        self.errors = list(errors or [])
        if self.errors:
            message = f"No references could be resolved ({len(self.errors)} line(s) failed)"
        else:
            message = "No references were provided"
        super().__init__(message)

from __future__ import annotations


class ResumeSectionsError(Exception):
    pass


class DocumentDecodeError(ResumeSectionsError):
    """The PDF could not be opened or one of its pages could not be read."""


class RecordParseError(ResumeSectionsError, ValueError):
    """The resume record is not a JSON object."""

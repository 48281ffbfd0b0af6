"""Exceptions raised by the codec and filesystem helpers.

Each exception is bound to an :class:`ErrorKind`. The engine catches them at
its boundary and reports the kind on the returned result.
"""
from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    INVALID_FORMAT = "invalid_format"
    NO_VALID_PAGES = "no_valid_pages"
    PARSE_ERROR = "parse_error"
    COPY_ERROR = "copy_error"
    IO_ERROR = "io_error"


class PdfEditorError(Exception):
    """Base class for every expected failure of a page operation."""

    kind = ErrorKind.COPY_ERROR


class NotFoundError(PdfEditorError):
    """A source file or folder does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidFormatError(PdfEditorError):
    """A file is not a readable PDF."""

    kind = ErrorKind.INVALID_FORMAT


class NoValidPagesError(PdfEditorError):
    """Nothing is left to copy once pages are clipped to the document."""

    kind = ErrorKind.NO_VALID_PAGES


class PageSpecError(PdfEditorError, ValueError):
    """A page specification string could not be parsed."""

    kind = ErrorKind.PARSE_ERROR


class CopyError(PdfEditorError):
    """The codec failed while copying pages between documents."""

    kind = ErrorKind.COPY_ERROR


class StorageError(PdfEditorError):
    """Creating, writing or deleting a file or directory failed."""

    kind = ErrorKind.IO_ERROR

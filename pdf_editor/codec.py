"""
Access to PDF containers.

The engine only talks to a :class:`DocumentCodec`. :class:`PypdfCodec` is the
implementation used by the application; tests substitute their own.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional, Sequence

from pypdf import PdfReader, PdfWriter

from .errors import CopyError, InvalidFormatError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


class DocumentHandle:
    """An open source document. Release it with ``close()`` or a ``with`` block."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.closed = False

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class WriteHandle(DocumentHandle):
    """A destination document being assembled at ``path``."""


class DocumentCodec(ABC):
    @abstractmethod
    def open(self, path: Path) -> DocumentHandle:
        """Opens a source document. Raises NotFoundError or InvalidFormatError."""

    @abstractmethod
    def page_count(self, handle: DocumentHandle) -> int:
        ...

    @abstractmethod
    def copy_pages(self, source: DocumentHandle, page_numbers: Sequence[int], destination: WriteHandle) -> None:
        """Appends ``page_numbers`` (1-based, in the given order) to ``destination``. Raises CopyError."""

    @abstractmethod
    def create_writer(self, path: Path) -> WriteHandle:
        """Creates the destination file at ``path``. Raises StorageError."""

    @abstractmethod
    def set_metadata(self, destination: WriteHandle, title: str, producer: str) -> None:
        ...

    @abstractmethod
    def save(self, destination: WriteHandle) -> None:
        """Writes the assembled document to its file. Raises StorageError."""

    def close(self, handle: DocumentHandle) -> None:
        handle.close()


class PypdfDocument(DocumentHandle):
    def __init__(self, path: Path, stream: BinaryIO, reader: PdfReader):
        super().__init__(path)
        self.stream = stream
        self.reader = reader

    def close(self):
        if not self.closed:
            self.stream.close()
        super().close()


class PypdfWriteHandle(WriteHandle):
    def __init__(self, path: Path, stream: BinaryIO):
        super().__init__(path)
        self.stream = stream
        self.writer = PdfWriter()

    def close(self):
        if not self.closed:
            self.stream.close()
        super().close()


class PypdfCodec(DocumentCodec):
    """DocumentCodec backed by pypdf's PdfReader and PdfWriter."""

    def open(self, path: Path) -> PypdfDocument:
        path = Path(path)
        try:
            stream = open(path, "rb")
        except FileNotFoundError as e:
            raise NotFoundError(f"Input file does not exist: {path}") from e
        except OSError as e:
            raise NotFoundError(f"Input file cannot be opened: {path} ({e})") from e

        try:
            reader = PdfReader(stream)
            total = len(reader.pages)
        except Exception as e:
            stream.close()
            raise InvalidFormatError(f"'{path.name}' is not a readable PDF: {e}") from e

        logger.debug(f"Source document '{path.name}' opened. Total pages: {total}")
        return PypdfDocument(path, stream, reader)

    def page_count(self, handle: PypdfDocument) -> int:
        return len(handle.reader.pages)

    def copy_pages(self, source: PypdfDocument, page_numbers: Sequence[int], destination: PypdfWriteHandle) -> None:
        try:
            # Resolve every page before adding any, so a bad number leaves the destination untouched.
            selected = [source.reader.pages[page_number - 1] for page_number in page_numbers]
            for page in selected:
                destination.writer.add_page(page)
        except Exception as e:
            raise CopyError(f"Failed to copy pages from '{source.path.name}': {e}") from e

    def create_writer(self, path: Path) -> PypdfWriteHandle:
        path = Path(path)
        try:
            stream = open(path, "wb")
        except OSError as e:
            raise StorageError(f"Cannot create output file '{path}': {e}") from e
        logger.debug(f"Target document created: {path}")
        return PypdfWriteHandle(path, stream)

    def set_metadata(self, destination: PypdfWriteHandle, title: str, producer: str) -> None:
        destination.writer.add_metadata({"/Title": title, "/Producer": producer, "/Creator": producer})

    def save(self, destination: PypdfWriteHandle) -> None:
        try:
            destination.writer.write(destination.stream)
            destination.stream.flush()
        except OSError as e:
            raise StorageError(f"Failed to write '{destination.path}': {e}") from e
        except Exception as e:
            raise CopyError(f"Failed to assemble '{destination.path.name}': {e}") from e


def open_page_count(codec: DocumentCodec, path: Path) -> Optional[int]:
    """Returns the page count of ``path``, or None when the codec cannot open it."""
    try:
        with codec.open(path) as handle:
            return codec.page_count(handle)
    except (NotFoundError, InvalidFormatError) as e:
        logger.error(f"Failed to get page count for {path}: {e}")
        return None

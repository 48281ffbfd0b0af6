"""Helpers shared by the test modules: real PDFs built with pypdf and an in-memory codec."""
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pypdf import PdfReader, PdfWriter

from pdf_editor.codec import DocumentCodec, DocumentHandle, WriteHandle
from pdf_editor.errors import CopyError, InvalidFormatError, NotFoundError, StorageError

BASE_WIDTH = 100


def make_pdf(path: Path, page_count: int, first_page: int = 1) -> Path:
    """Writes a PDF whose page N is BASE_WIDTH + N points wide, so pages can be told apart."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    writer = PdfWriter()
    for number in range(first_page, first_page + page_count):
        writer.add_blank_page(width=BASE_WIDTH + number, height=200)
    with open(path, "wb") as f:
        writer.write(f)
    return path


def page_numbers(path: Path) -> List[int]:
    """Reads back the page identities written by make_pdf."""
    reader = PdfReader(str(path))
    return [round(float(page.mediabox.width)) - BASE_WIDTH for page in reader.pages]


class FakeDocument(DocumentHandle):
    def __init__(self, path: Path, pages: List[str]):
        super().__init__(path)
        self.pages = pages


class FakeWriter(WriteHandle):
    def __init__(self, path: Path):
        super().__init__(path)
        self.pages: List[str] = []
        self.metadata: Dict[str, str] = {}


class FakeCodec(DocumentCodec):
    """
    In-memory codec. Documents are lists of page labels keyed by path.

    Files are still created on disk so that validation and cleanup behave as
    they do with real PDFs.
    """

    def __init__(self):
        self.documents: Dict[str, List[str]] = {}
        self.saved: Dict[str, List[str]] = {}
        self.metadata: Dict[str, Dict[str, str]] = {}
        self.handles: List[DocumentHandle] = []
        self.corrupt = set()
        self.failing_copies = set()
        self.failing_writers = set()
        self.writers_created = 0

    def add_document(self, path: Path, page_count: int, label: Optional[str] = None) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"%PDF-fake")
        label = label or path.stem
        self.documents[str(path)] = [f"{label}:{n}" for n in range(1, page_count + 1)]
        return path

    def all_closed(self) -> bool:
        return all(handle.closed for handle in self.handles)

    def open(self, path: Path) -> FakeDocument:
        key = str(Path(path))
        if key not in self.documents:
            raise NotFoundError(f"Input file does not exist: {path}")
        if key in self.corrupt:
            raise InvalidFormatError(f"'{Path(path).name}' is not a readable PDF")
        handle = FakeDocument(Path(path), self.documents[key])
        self.handles.append(handle)
        return handle

    def page_count(self, handle: FakeDocument) -> int:
        return len(handle.pages)

    def copy_pages(self, source: FakeDocument, page_numbers: Iterable[int], destination: FakeWriter) -> None:
        if str(source.path) in self.failing_copies:
            raise CopyError(f"copy failed for {source.path.name}")
        destination.pages.extend(source.pages[n - 1] for n in page_numbers)

    def create_writer(self, path: Path) -> FakeWriter:
        self.writers_created += 1
        if self.writers_created in self.failing_writers:
            raise StorageError(f"Cannot create output file '{path}'")
        Path(path).write_bytes(b"")
        handle = FakeWriter(Path(path))
        self.handles.append(handle)
        return handle

    def set_metadata(self, destination: FakeWriter, title: str, producer: str) -> None:
        destination.metadata = {"title": title, "producer": producer}

    def save(self, destination: FakeWriter) -> None:
        destination.path.write_bytes(b"%PDF-fake " + ",".join(destination.pages).encode())
        self.saved[str(destination.path)] = list(destination.pages)
        self.metadata[str(destination.path)] = dict(destination.metadata)

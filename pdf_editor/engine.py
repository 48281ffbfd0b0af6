import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .codec import DocumentCodec, PypdfCodec, open_page_count
from .config import EditorConfig
from .configs import ConcatenationRequest, ExtractionRequest, SplitRequest
from .errors import ErrorKind, PdfEditorError, StorageError
from .file_utils import ensure_folder, prepare_destination, remove_file, remove_if_empty, same_file, split_output_path
from .page_spec import require_valid_pages
from .results import BatchResult, ExtractionResult
from .validation import validate_file

logger = logging.getLogger(__name__)

Request = Union[ExtractionRequest, SplitRequest, ConcatenationRequest]


class PageAssemblyEngine:
    """
    Extracts, splits and concatenates PDF pages through a DocumentCodec.

    Expected failures never escape: every operation returns a result whose
    ``error`` names the ErrorKind. Documents are opened and closed within the
    call that needs them.
    """

    def __init__(self, codec: Optional[DocumentCodec] = None, config: Optional[EditorConfig] = None):
        self.codec = codec or PypdfCodec()
        self.config = config or EditorConfig()

    def validate(self, path: Path) -> bool:
        return validate_file(path, self.codec)

    def page_count(self, path: Path) -> int:
        """Page count of ``path``; 0 when the file cannot be read."""
        return open_page_count(self.codec, Path(path)) or 0

    def run(self, request: Request):
        """Dispatches a request object to the matching operation."""
        if isinstance(request, ExtractionRequest):
            return self.extract(request.source, request.destination, request.pages)
        elif isinstance(request, SplitRequest):
            return self.split(request.source, request.output_folder, request.pages, request.base_name)
        elif isinstance(request, ConcatenationRequest):
            return self.concatenate(request.sources, request.destination)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    def extract(self, source: Path, destination: Path, pages: Iterable[int]) -> ExtractionResult:
        """
        Copies ``pages`` of ``source`` into a new document at ``destination``.

        Pages are written in ascending order whatever order they were given in.
        An existing file at ``destination`` is replaced.
        """
        source, destination = Path(source), Path(destination)
        pages = list(pages)
        logger.debug(f"Starting extraction from '{source}' to '{destination}'. Pages: {pages}")

        try:
            with self.codec.open(source) as src:
                valid_pages = require_valid_pages(pages, self.codec.page_count(src))

                if same_file(source, destination):
                    raise StorageError(f"Output file must differ from the input file: {destination}")
                prepare_destination(destination)

                try:
                    with self.codec.create_writer(destination) as target:
                        self.codec.copy_pages(src, valid_pages, target)
                        self.codec.set_metadata(target, self.config.extraction_title, self.config.producer)
                        self.codec.save(target)
                except PdfEditorError:
                    remove_if_empty(destination)
                    raise
        except PdfEditorError as e:
            logger.error(f"PDF extraction failed: {e}")
            return ExtractionResult(success=False, message=f"Failed to extract pages: {e}", error=e.kind)

        logger.info(f"Extracted {len(valid_pages)} pages from '{source.name}' to {destination}")
        return ExtractionResult(
            success=True,
            message="Pages extracted successfully!",
            output_path=destination,
            page_count=len(valid_pages),
        )

    def split(self, source: Path, output_folder: Path, pages: Iterable[int], base_name: Optional[str] = None) -> BatchResult:
        """
        Writes every selected page of ``source`` to its own file in ``output_folder``.

        Files are named ``{base_name}_page_{page}.pdf``; ``base_name`` defaults to
        the source's stem. The first failure stops the run; files written before
        it are kept and reported.
        """
        source, output_folder = Path(source), Path(output_folder)
        pages = list(pages)
        base = base_name.strip() if base_name and base_name.strip() else source.stem
        created: List[Path] = []
        logger.debug(f"Starting split extraction from '{source}' into folder '{output_folder}'. Pages: {pages}")

        try:
            if Path(base).name != base:
                raise StorageError(f"Base name must be a plain file name, not a path: '{base}'")
            with self.codec.open(source) as src:
                valid_pages = require_valid_pages(pages, self.codec.page_count(src))
                ensure_folder(output_folder)

                for page in valid_pages:
                    output_path = split_output_path(output_folder, base, page)
                    try:
                        if same_file(source, output_path):
                            raise StorageError(f"Output file would overwrite the input file: {output_path}")
                        self._write_single_page(src, page, output_path, base)
                    except PdfEditorError as e:
                        remove_if_empty(output_path)
                        raise type(e)(f"page {page}: {e}") from e
                    created.append(output_path)
                    logger.debug(f"Created file: {output_path}")
        except PdfEditorError as e:
            logger.error(f"Split extraction failed after {len(created)} files: {e}")
            return BatchResult(
                success=False,
                message=f"Split extraction failed: {e}",
                output_folder=output_folder,
                created_files=tuple(created),
                error=e.kind,
            )

        logger.info(f"Split '{source.name}' into {len(created)} files in '{output_folder}'")
        return BatchResult(
            success=True,
            message=f"Successfully extracted {len(created)} files.",
            output_folder=output_folder,
            created_files=tuple(created),
        )

    def _write_single_page(self, src, page: int, output_path: Path, base: str) -> None:
        remove_file(output_path)
        with self.codec.create_writer(output_path) as target:
            self.codec.copy_pages(src, [page], target)
            self.codec.set_metadata(target, self.config.split_page_title(base, page), self.config.producer)
            self.codec.save(target)

    def concatenate(self, sources: Sequence[Path], destination: Path) -> ExtractionResult:
        """
        Appends every page of each source, in the given order, into ``destination``.

        Invalid or unreadable sources are skipped and listed in
        ``skipped_sources``; the run only fails when nothing could be added.
        """
        sources = [Path(path) for path in sources or []]
        destination = Path(destination)
        logger.debug(f"Starting concatenation to '{destination}'. Input files: {[p.name for p in sources]}")

        if not sources:
            logger.error("No input paths provided")
            return ExtractionResult(
                success=False,
                message="No input files provided for concatenation.",
                error=ErrorKind.NO_VALID_PAGES,
            )

        skipped: List[Path] = []
        total_pages = 0
        try:
            if any(same_file(path, destination) for path in sources):
                raise StorageError(f"Output file must not be one of the input files: {destination}")
            prepare_destination(destination)
            with self.codec.create_writer(destination) as target:
                for path in sources:
                    copied = self._append_source(path, target)
                    if copied:
                        total_pages += copied
                    else:
                        skipped.append(path)

                if total_pages:
                    self.codec.set_metadata(target, self.config.concatenation_title, self.config.producer)
                    self.codec.save(target)
        except PdfEditorError as e:
            logger.error(f"PDF concatenation failed: {e}")
            remove_if_empty(destination)
            return ExtractionResult(
                success=False,
                message=f"Failed to concatenate PDF files: {e}",
                error=e.kind,
                skipped_sources=tuple(skipped),
            )

        logger.debug(f"Total pages copied: {total_pages}")
        if not total_pages:
            logger.error("No content was added to the merged document")
            remove_if_empty(destination)
            return ExtractionResult(
                success=False,
                message="No content added: none of the input files could be concatenated.",
                error=ErrorKind.NO_VALID_PAGES,
                skipped_sources=tuple(skipped),
            )

        logger.info(f"Concatenated {len(sources) - len(skipped)} files ({total_pages} pages) into {destination}")
        return ExtractionResult(
            success=True,
            message="PDF files concatenated successfully!",
            output_path=destination,
            page_count=total_pages,
            skipped_sources=tuple(skipped),
        )

    def _append_source(self, path: Path, target) -> int:
        """Copies all pages of ``path`` into ``target``; returns how many, 0 if skipped."""
        logger.debug(f"Processing file: {path.name}")
        if not self.validate(path):
            logger.warning(f"Skipping invalid file: {path.name}")
            return 0

        try:
            with self.codec.open(path) as src:
                page_count = self.codec.page_count(src)
                if page_count <= 0:
                    logger.warning(f"Source document has no pages: {path.name}")
                    return 0
                self.codec.copy_pages(src, list(range(1, page_count + 1)), target)
        except PdfEditorError as e:
            logger.error(f"Failed to process file {path.name}: {e}")
            return 0

        logger.debug(f"Successfully merged {page_count} pages from {path.name}")
        return page_count

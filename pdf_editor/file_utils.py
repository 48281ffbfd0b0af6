import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .configs import ConcatenationMode
from .errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"

CONCATENATION_OUTPUT_NAMES = {
    ConcatenationMode.FROM_FOLDER: "concatenated_folder_pdfs.pdf",
    ConcatenationMode.INDIVIDUAL_FILES: "concatenated_files.pdf",
}


def has_pdf_extension(path: Path) -> bool:
    return Path(path).suffix.lower() == PDF_EXTENSION


def clean_path_input(raw: Optional[str]) -> str:
    """Strips whitespace and the quotes a shell adds around dragged-in paths."""
    if raw is None:
        return ""
    return raw.strip().strip('"').strip("'").strip()


def ensure_folder(folder: Path) -> None:
    folder = Path(folder)
    if folder.is_dir():
        return
    logger.debug(f"Creating output directory: {folder}")
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Cannot create directory '{folder}': {e}") from e


def remove_file(path: Path) -> None:
    path = Path(path)
    if not path.exists():
        return
    logger.debug(f"Deleting existing output file: {path}")
    try:
        path.unlink()
    except OSError as e:
        raise StorageError(f"Cannot delete existing file '{path}': {e}") from e


def prepare_destination(path: Path) -> None:
    """Creates the parent directory of ``path`` and removes a file already sitting there."""
    path = Path(path)
    if str(path.parent) not in ("", "."):
        ensure_folder(path.parent)
    remove_file(path)


def remove_if_empty(path: Path) -> bool:
    """Deletes a zero-byte artifact left behind by a failed write. Returns True if one was removed."""
    path = Path(path)
    try:
        if path.is_file() and path.stat().st_size == 0:
            logger.warning(f"Output file is empty, deleting it: {path}")
            path.unlink()
            return True
    except OSError as e:
        logger.error(f"Could not remove empty output file '{path}': {e}")
    return False


def same_file(first: Path, second: Path) -> bool:
    first, second = Path(first), Path(second)
    if first.exists() and second.exists():
        return os.path.samefile(first, second)
    return first.resolve() == second.resolve()


def default_extraction_path(source: Path) -> Path:
    source = Path(source)
    return source.parent / f"{source.stem}_extracted{PDF_EXTENSION}"


def split_output_path(folder: Path, base_name: str, page: int) -> Path:
    return Path(folder) / f"{base_name}_page_{page}{PDF_EXTENSION}"


def default_concatenation_path(sources: Iterable[Path], mode: ConcatenationMode) -> Path:
    sources = list(sources)
    folder = Path(sources[0]).parent if sources else Path.cwd()
    return folder / CONCATENATION_OUTPUT_NAMES.get(mode, f"concatenated{PDF_EXTENSION}")


def gather_pdf_files(folder: Path, exclude: Iterable[Path] = ()) -> List[Path]:
    """Lists the PDF files directly inside ``folder`` in alphabetical order."""
    folder = Path(folder)
    if not folder.is_dir():
        raise NotFoundError(f"Folder not found: {folder}")

    excluded = {Path(path).resolve() for path in exclude}
    pdf_files = sorted(
        path for path in folder.iterdir()
        if path.is_file() and has_pdf_extension(path) and path.resolve() not in excluded
    )
    logger.info(f"Found {len(pdf_files)} PDF files in '{folder}': {[f.name for f in pdf_files][:5]}...")
    return pdf_files

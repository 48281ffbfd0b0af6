import logging
from pathlib import Path

from .codec import DocumentCodec
from .file_utils import has_pdf_extension

logger = logging.getLogger(__name__)


def validate_file(path: Path, codec: DocumentCodec) -> bool:
    """
    Checks that ``path`` is a non-empty, readable PDF with at least one page.

    Every failure is logged and reported as False; nothing is raised.
    """
    path = Path(path)
    logger.debug(f"Validating file: {path.name}")

    if not path.is_file():
        logger.error(f"File does not exist: {path}")
        return False

    if not has_pdf_extension(path):
        logger.error(f"File is not a PDF: {path}")
        return False

    try:
        size = path.stat().st_size
    except OSError as e:
        logger.error(f"Cannot read file size of {path}: {e}")
        return False
    logger.debug(f"File size: {size} bytes")
    if size == 0:
        logger.error(f"File is empty: {path}")
        return False

    try:
        with codec.open(path) as handle:
            page_count = codec.page_count(handle)
    except Exception as e:
        logger.error(f"PDF validation failed for {path.name}: {e}")
        return False

    is_valid = page_count > 0
    logger.debug(
        f"PDF validation result for {path.name}: {'VALID' if is_valid else 'INVALID'} ({page_count} pages)"
    )
    return is_valid

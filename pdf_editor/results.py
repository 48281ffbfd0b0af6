from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .errors import ErrorKind


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of an extraction or a concatenation."""

    success: bool
    message: str
    output_path: Optional[Path] = None
    page_count: int = 0
    error: Optional[ErrorKind] = None
    skipped_sources: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a split into one file per page.

    ``created_files`` lists what exists on disk, even when ``success`` is False.
    """

    success: bool
    message: str
    output_folder: Optional[Path] = None
    created_files: Tuple[Path, ...] = ()
    error: Optional[ErrorKind] = None

    @property
    def files_created(self) -> int:
        return len(self.created_files)

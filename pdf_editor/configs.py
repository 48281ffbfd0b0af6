from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class ConcatenationMode(Enum):
    FROM_FOLDER = "folder"
    INDIVIDUAL_FILES = "files"


@dataclass(frozen=True)
class ExtractionRequest:
    source: Path
    destination: Path
    pages: Tuple[int, ...]


@dataclass(frozen=True)
class SplitRequest:
    source: Path
    output_folder: Path
    pages: Tuple[int, ...]
    base_name: Optional[str] = None


@dataclass(frozen=True)
class ConcatenationRequest:
    sources: Tuple[Path, ...]
    destination: Path
    mode: ConcatenationMode = ConcatenationMode.INDIVIDUAL_FILES

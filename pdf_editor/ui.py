"""Interactive console shell: prompts, menus and result rendering."""
import logging
from pathlib import Path
from typing import Callable, List, Optional

from tqdm import tqdm

from .configs import ConcatenationMode, ConcatenationRequest, ExtractionRequest, SplitRequest
from .engine import PageAssemblyEngine
from .errors import NotFoundError, PageSpecError, StorageError
from .file_utils import (
    CONCATENATION_OUTPUT_NAMES,
    clean_path_input,
    default_concatenation_path,
    default_extraction_path,
    ensure_folder,
    gather_pdf_files,
    has_pdf_extension,
)
from .page_spec import PageGrammar, parse_page_spec
from .results import BatchResult, ExtractionResult

logger = logging.getLogger(__name__)

GRAMMAR_CHOICES = {
    "1": (PageGrammar.RANGE, "Enter page range (e.g., 1-5)"),
    "2": (PageGrammar.LIST, "Enter page numbers separated by commas (e.g., 1,3,5)"),
    "3": (PageGrammar.MIXED, "Enter mixed format (e.g., 1-3,7,10-12)"),
}


class ConsoleInput:
    """Collects validated paths and page selections from the user."""

    def __init__(self, validator: Callable[[Path], bool], input_func: Callable[[str], str] = input,
                 output: Callable[..., None] = print):
        self.validator = validator
        self.input = input_func
        self.output = output

    def ask(self, prompt: str) -> str:
        return (self.input(prompt) or "").strip()

    def get_file_path(self, prompt: str) -> Path:
        while True:
            raw = clean_path_input(self.input(f"{prompt}: "))
            if not raw:
                self.output("Please provide a valid file path.")
                continue
            path = Path(raw)
            if not path.is_file():
                self.output("File not found. Please check the path and try again.")
                continue
            if not has_pdf_extension(path):
                self.output("Please provide a PDF file.")
                continue
            return path

    def get_page_numbers(self, total_pages: int) -> List[int]:
        self.output(f"\nPDF has {total_pages} pages.")
        self.output("How would you like to specify pages?")
        self.output("1. Sequential range (e.g., 1-5)")
        self.output("2. Individual page numbers (e.g., 1,3,5,7)")
        self.output("3. Mixed (e.g., 1-3,7,10-12)")

        while True:
            choice = self.ask("\nSelect option (1-3): ")
            if choice in GRAMMAR_CHOICES:
                break
            self.output("Invalid choice. Please select 1, 2, or 3.")

        grammar, prompt = GRAMMAR_CHOICES[choice]
        while True:
            text = self.ask(f"{prompt} [1-{total_pages}]: ")
            try:
                return parse_page_spec(text, total_pages, grammar)
            except PageSpecError as e:
                self.output(str(e))

    def get_output_path(self, default_path: Path) -> Path:
        raw = clean_path_input(self.input(f"\nOutput file path (press Enter for '{default_path}'): "))
        if not raw:
            return Path(default_path)
        path = Path(raw)
        try:
            ensure_folder(path.parent)
        except StorageError as e:
            logger.debug(f"Failed to create directory: {e}")
            self.output("Could not create output directory. Using default path.")
            return Path(default_path)
        return path

    def get_output_folder(self, default_folder: Path) -> Path:
        raw = clean_path_input(self.input(f"\nOutput folder (press Enter for '{default_folder}'): "))
        if not raw:
            return Path(default_folder)
        folder = Path(raw)
        try:
            ensure_folder(folder)
        except StorageError:
            self.output("Could not create output folder. Using default folder.")
            return Path(default_folder)
        return folder

    def get_base_name(self, default_name: str) -> str:
        return self.ask(f"Base name for output files (press Enter for '{default_name}'): ") or default_name

    def get_pdf_files_from_folder(self) -> List[Path]:
        while True:
            raw = clean_path_input(self.input("Enter folder path containing PDF files: "))
            if not raw:
                self.output("Please provide a valid folder path.")
                continue
            folder = Path(raw)
            try:
                # A previous run's output would otherwise be merged into the next one.
                previous_output = folder / CONCATENATION_OUTPUT_NAMES[ConcatenationMode.FROM_FOLDER]
                pdf_files = gather_pdf_files(folder, exclude=[previous_output])
            except NotFoundError:
                self.output("Folder not found. Please check the path and try again.")
                continue
            if not pdf_files:
                self.output("No PDF files found in the specified folder.")
                continue
            self.output(f"Found {len(pdf_files)} PDF files in the folder.")
            return pdf_files

    def get_individual_pdf_files(self) -> List[Path]:
        pdf_files: List[Path] = []
        self.output("Enter paths of PDF files to concatenate (one per line).")
        self.output("Press Enter on an empty line when done.")

        while True:
            raw = clean_path_input(self.input(f"PDF file path #{len(pdf_files) + 1} (or Enter to finish): "))
            if not raw:
                if pdf_files:
                    return pdf_files
                self.output("Please provide at least one PDF file.")
                continue
            path = Path(raw)
            if not path.is_file():
                self.output("File not found. Please check the path and try again.")
            elif not has_pdf_extension(path):
                self.output("Please provide a PDF file.")
            elif self.validator(path):
                pdf_files.append(path)
                self.output(f"Added: {path.name}")
            else:
                self.output("The file appears to be an invalid PDF. Please try another file.")

    def get_concatenation_mode(self) -> ConcatenationMode:
        self.output("\nHow would you like to specify PDF files?")
        self.output("1. From folder (all PDF files in alphabetical order)")
        self.output("2. Individual files (specify each file path)")
        while True:
            choice = self.ask("\nSelect option (1-2): ")
            if choice == "1":
                return ConcatenationMode.FROM_FOLDER
            if choice == "2":
                return ConcatenationMode.INDIVIDUAL_FILES
            self.output("Invalid choice. Please select 1 or 2.")

    def confirm(self, question: str) -> bool:
        return self.ask(f"{question} (y/n): ").lower() == "y"


def render_extraction_result(result: ExtractionResult, output: Callable[..., None] = print,
                             pages_label: str = "Pages extracted") -> None:
    output()
    if result.success:
        output("✓ " + result.message)
        output(f"  Output file: {result.output_path}")
        output(f"  {pages_label}: {result.page_count}")
        for skipped in result.skipped_sources:
            output(f"  Skipped: {skipped.name}")
    else:
        output("✗ " + result.message)
    output()


def render_batch_result(result: BatchResult, output: Callable[..., None] = print) -> None:
    output()
    output(("✓ " if result.success else "✗ ") + result.message)
    output(f"  Output folder: {result.output_folder}")
    output(f"  Files created: {result.files_created}")
    for path in result.created_files:
        output(f"    - {path.name}")
    output()


def _select_pages(engine: PageAssemblyEngine, console: ConsoleInput, title: str):
    console.output(f"\n=== {title} ===")
    input_path = console.get_file_path("Enter PDF file path")
    if not engine.validate(input_path):
        console.output("Error: Invalid or corrupted PDF file.\n")
        return None, None
    total_pages = engine.page_count(input_path)
    if total_pages == 0:
        console.output("Error: Could not read PDF or PDF has no pages.\n")
        return None, None
    return input_path, console.get_page_numbers(total_pages)


def extract_flow(engine: PageAssemblyEngine, console: ConsoleInput) -> Optional[ExtractionResult]:
    input_path, pages = _select_pages(engine, console, "PDF Page Extraction")
    if input_path is None:
        return None
    output_path = console.get_output_path(default_extraction_path(input_path))

    console.output(f"\nExtracting pages {', '.join(str(p) for p in pages)}...")
    result = engine.run(ExtractionRequest(source=input_path, destination=output_path, pages=tuple(pages)))
    render_extraction_result(result, console.output)
    return result


def split_flow(engine: PageAssemblyEngine, console: ConsoleInput) -> Optional[BatchResult]:
    input_path, pages = _select_pages(engine, console, "Split PDF Pages into Separate Files")
    if input_path is None:
        return None
    output_folder = console.get_output_folder(input_path.parent)
    base_name = console.get_base_name(input_path.stem)

    console.output(f"\nExtracting {len(pages)} page(s) into separate files...")
    result = engine.run(SplitRequest(
        source=input_path, output_folder=output_folder, pages=tuple(pages), base_name=base_name,
    ))
    render_batch_result(result, console.output)
    return result


def _summarize(engine: PageAssemblyEngine, console: ConsoleInput, input_files: List[Path]) -> List[Path]:
    """Prints the per-file summary and returns the files that passed validation."""
    checks = [
        (path, engine.validate(path))
        for path in tqdm(input_files, desc="Validating files", disable=not engine.config.show_progress)
    ]

    console.output("\n=== Concatenation Summary ===")
    valid_files: List[Path] = []
    total_pages = 0
    for index, (path, is_valid) in enumerate(checks, start=1):
        if is_valid:
            page_count = engine.page_count(path)
            valid_files.append(path)
            total_pages += page_count
            console.output(f"{index}. {path.name} ({page_count} pages)")
        else:
            console.output(f"{index}. {path.name} (INVALID - SKIPPED)")

    if valid_files:
        console.output(f"\nTotal: {len(valid_files)} files, {total_pages} pages")
    return valid_files


def concatenate_flow(engine: PageAssemblyEngine, console: ConsoleInput) -> Optional[ExtractionResult]:
    console.output("\n=== PDF Concatenation ===")
    mode = console.get_concatenation_mode()
    if mode is ConcatenationMode.FROM_FOLDER:
        input_files = console.get_pdf_files_from_folder()
    else:
        input_files = console.get_individual_pdf_files()

    valid_files = _summarize(engine, console, input_files)
    if not valid_files:
        console.output("No valid PDF files to concatenate.\n")
        return None
    if not console.confirm("\nProceed with concatenation?"):
        console.output("Concatenation cancelled.\n")
        return None

    output_path = console.get_output_path(default_concatenation_path(valid_files, mode))
    console.output(f"\nConcatenating {len(valid_files)} PDF files...")
    result = engine.run(ConcatenationRequest(sources=tuple(valid_files), destination=output_path, mode=mode))
    render_extraction_result(result, console.output, pages_label="Total pages")
    return result


MENU = {
    "1": ("Extract Pages from PDF", extract_flow),
    "2": ("Split PDF Pages into Separate Files", split_flow),
    "3": ("Concatenate PDF Files", concatenate_flow),
}


def run_interactive(engine: PageAssemblyEngine, console: ConsoleInput) -> None:
    """Runs the menu loop until the user quits or input ends."""
    console.output("=== PDF Processing Application ===\n")
    while True:
        console.output("Available functionalities:")
        for key, (label, _) in MENU.items():
            console.output(f"{key}. {label}")
        console.output("Q. Quit")
        try:
            choice = console.ask("\nSelect an option: ")
        except (EOFError, KeyboardInterrupt):
            console.output("\nGoodbye!")
            return

        if choice.lower() == "q":
            console.output("Goodbye!")
            return
        if choice not in MENU:
            console.output("Invalid choice. Please try again.\n")
            continue

        try:
            MENU[choice][1](engine, console)
        except (EOFError, KeyboardInterrupt):
            console.output("\nGoodbye!")
            return
        except Exception as e:
            logger.error(f"An unexpected error occurred: {e}", exc_info=True)
            console.output(f"An unexpected error occurred: {e}\n")

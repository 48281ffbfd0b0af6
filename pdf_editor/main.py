import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import EditorConfig, load_config
from .configs import ConcatenationMode
from .engine import PageAssemblyEngine
from .errors import NotFoundError, PageSpecError
from .file_utils import (
    CONCATENATION_OUTPUT_NAMES,
    default_concatenation_path,
    default_extraction_path,
    gather_pdf_files,
)
from .page_spec import PageGrammar, parse_page_spec
from .ui import ConsoleInput, render_batch_result, render_extraction_result, run_interactive


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-editor",
        description="Extract, split and concatenate PDF pages. Runs the interactive menu when no command is given.",
    )
    parser.add_argument("--config", type=Path, help="Path to a YAML configuration file.")
    parser.add_argument("--verbose", action="store_true", help="Log every processing step.")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("interactive", help="Run the interactive menu (default).")

    grammar_choices = [grammar.value for grammar in PageGrammar]

    extract = subparsers.add_parser("extract", help="Extract pages into a new PDF.")
    extract.add_argument("source", type=Path, help="The path to the source PDF file.")
    extract.add_argument("--pages", required=True, help="Pages to extract (e.g., '1-5', '1,3,5', '1-3,7').")
    extract.add_argument("--grammar", choices=grammar_choices, default=PageGrammar.MIXED.value,
                         help="How --pages is written (defaults to 'mixed').")
    extract.add_argument("-o", "--output", type=Path,
                         help="Output file (defaults to '<source>_extracted.pdf' next to the source).")

    split = subparsers.add_parser("split", help="Write each selected page to its own PDF.")
    split.add_argument("source", type=Path, help="The path to the source PDF file.")
    split.add_argument("--pages", required=True, help="Pages to split out (e.g., '1-5', '1,3,5', '1-3,7').")
    split.add_argument("--grammar", choices=grammar_choices, default=PageGrammar.MIXED.value,
                       help="How --pages is written (defaults to 'mixed').")
    split.add_argument("--output-dir", type=Path, help="Folder for the page files (defaults to the source folder).")
    split.add_argument("--base-name", help="File name prefix (defaults to the source file name).")

    concat = subparsers.add_parser("concat", help="Concatenate PDFs in the given order.")
    concat.add_argument("sources", type=Path, nargs="*", help="PDF files to concatenate, in order.")
    concat.add_argument("--folder", type=Path,
                        help="Concatenate every PDF in this folder, alphabetically, instead of listed files.")
    concat.add_argument("-o", "--output", type=Path, help="Output file.")

    validate = subparsers.add_parser("validate", help="Check that files are readable PDFs.")
    validate.add_argument("files", type=Path, nargs="+", help="Files to check.")

    return parser


def configure_logging(config: EditorConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _parse_pages(engine: PageAssemblyEngine, source: Path, spec: str, grammar: str) -> List[int]:
    if not engine.validate(source):
        raise NotFoundError(f"Invalid or unreadable PDF file: {source}")
    return parse_page_spec(spec, engine.page_count(source), PageGrammar(grammar))


def _run_extract(engine: PageAssemblyEngine, args) -> bool:
    pages = _parse_pages(engine, args.source, args.pages, args.grammar)
    result = engine.extract(args.source, args.output or default_extraction_path(args.source), pages)
    render_extraction_result(result)
    return result.success


def _run_split(engine: PageAssemblyEngine, args) -> bool:
    pages = _parse_pages(engine, args.source, args.pages, args.grammar)
    result = engine.split(args.source, args.output_dir or args.source.parent, pages, args.base_name)
    render_batch_result(result)
    return result.success


def _run_concat(engine: PageAssemblyEngine, args) -> bool:
    if args.folder:
        mode = ConcatenationMode.FROM_FOLDER
        exclude = [args.output or args.folder / CONCATENATION_OUTPUT_NAMES[mode]]
        sources = gather_pdf_files(args.folder, exclude=exclude)
    else:
        mode = ConcatenationMode.INDIVIDUAL_FILES
        sources = list(args.sources)
    if not sources:
        raise NotFoundError("No PDF files to concatenate. Pass files or --folder.")

    result = engine.concatenate(sources, args.output or default_concatenation_path(sources, mode))
    render_extraction_result(result, pages_label="Total pages")
    return result.success


def _run_validate(engine: PageAssemblyEngine, args) -> bool:
    all_valid = True
    for path in args.files:
        if engine.validate(path):
            print(f"VALID    {path} ({engine.page_count(path)} pages)")
        else:
            print(f"INVALID  {path}")
            all_valid = False
    return all_valid


COMMANDS = {
    "extract": _run_extract,
    "split": _run_split,
    "concat": _run_concat,
    "validate": _run_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    The main entry point of the pdf-editor command.

    Returns:
        0 on success, 1 when the operation failed, 2 on bad arguments or configuration.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    configure_logging(config, args.verbose)
    engine = PageAssemblyEngine(config=config)

    if args.command in (None, "interactive"):
        run_interactive(engine, ConsoleInput(engine.validate))
        return 0

    try:
        succeeded = COMMANDS[args.command](engine, args)
    except (PageSpecError, NotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())

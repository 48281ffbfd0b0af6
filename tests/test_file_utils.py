import tempfile
import unittest
from pathlib import Path

from pdf_editor.configs import ConcatenationMode
from pdf_editor.errors import NotFoundError, StorageError
from pdf_editor.file_utils import (
    clean_path_input,
    default_concatenation_path,
    default_extraction_path,
    gather_pdf_files,
    prepare_destination,
    remove_if_empty,
    split_output_path,
)


class FileUtilsTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def test_default_names(self):
        source = Path("/docs/report.pdf")
        self.assertEqual(default_extraction_path(source), Path("/docs/report_extracted.pdf"))
        self.assertEqual(split_output_path(Path("/out"), "report", 7), Path("/out/report_page_7.pdf"))
        self.assertEqual(
            default_concatenation_path([source], ConcatenationMode.FROM_FOLDER),
            Path("/docs/concatenated_folder_pdfs.pdf"),
        )
        self.assertEqual(
            default_concatenation_path([source], ConcatenationMode.INDIVIDUAL_FILES),
            Path("/docs/concatenated_files.pdf"),
        )

    def test_clean_path_input_strips_quotes(self):
        self.assertEqual(clean_path_input('  "C:/My Files/a.pdf" '), "C:/My Files/a.pdf")
        self.assertEqual(clean_path_input(None), "")

    def test_prepare_destination_creates_parent_and_removes_file(self):
        destination = self.root / "nested" / "deeper" / "out.pdf"
        prepare_destination(destination)
        self.assertTrue(destination.parent.is_dir())

        destination.write_bytes(b"old")
        prepare_destination(destination)
        self.assertFalse(destination.exists())

    def test_prepare_destination_fails_when_directory_occupies_path(self):
        destination = self.root / "out.pdf"
        destination.mkdir()
        with self.assertRaises(StorageError):
            prepare_destination(destination)

    def test_remove_if_empty_only_removes_zero_byte_files(self):
        empty = self.root / "empty.pdf"
        empty.write_bytes(b"")
        full = self.root / "full.pdf"
        full.write_bytes(b"%PDF")

        self.assertTrue(remove_if_empty(empty))
        self.assertFalse(remove_if_empty(full))
        self.assertFalse(empty.exists())
        self.assertTrue(full.exists())

    def test_gather_pdf_files_sorted_and_filtered(self):
        for name in ("b.pdf", "a.PDF", "notes.txt", "concatenated_folder_pdfs.pdf"):
            (self.root / name).write_bytes(b"x")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "c.pdf").write_bytes(b"x")

        found = gather_pdf_files(self.root, exclude=[self.root / "concatenated_folder_pdfs.pdf"])

        self.assertEqual([path.name for path in found], ["a.PDF", "b.pdf"])

    def test_gather_pdf_files_missing_folder(self):
        with self.assertRaises(NotFoundError):
            gather_pdf_files(self.root / "nope")


if __name__ == "__main__":
    unittest.main()

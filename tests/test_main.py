import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from pdf_editor.main import build_parser, main

from pdf_fixtures import make_pdf, page_numbers


class CommandLineTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.config = self.root / "editor.yaml"
        self.config.write_text("show_progress: false\nlog_level: WARNING\n", encoding="utf-8")

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(["--config", str(self.config), *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_extract_with_default_output(self):
        source = make_pdf(self.root / "book.pdf", 8)

        code, out, _ = self.run_main("extract", str(source), "--pages", "7,1-2")

        self.assertEqual(code, 0)
        self.assertEqual(page_numbers(self.root / "book_extracted.pdf"), [1, 2, 7])
        self.assertIn("Pages extracted: 3", out)

    def test_extract_rejects_bad_specification(self):
        source = make_pdf(self.root / "book.pdf", 3)

        code, _, err = self.run_main("extract", str(source), "--pages", "2-9", "--grammar", "range")

        self.assertEqual(code, 2)
        self.assertIn("Invalid range", err)

    def test_split_into_folder(self):
        source = make_pdf(self.root / "book.pdf", 4)
        folder = self.root / "pages"

        code, _, _ = self.run_main("split", str(source), "--pages", "2,4", "--output-dir", str(folder))

        self.assertEqual(code, 0)
        self.assertEqual(sorted(p.name for p in folder.iterdir()), ["book_page_2.pdf", "book_page_4.pdf"])

    def test_concat_files_in_given_order(self):
        a = make_pdf(self.root / "a.pdf", 1, first_page=1)
        b = make_pdf(self.root / "b.pdf", 2, first_page=5)
        output = self.root / "merged.pdf"

        code, out, _ = self.run_main("concat", str(b), str(a), "-o", str(output))

        self.assertEqual(code, 0)
        self.assertEqual(page_numbers(output), [5, 6, 1])
        self.assertIn("Total pages: 3", out)

    def test_concat_folder_default_output(self):
        make_pdf(self.root / "x.pdf", 1, first_page=3)
        make_pdf(self.root / "y.pdf", 1, first_page=4)

        code, _, _ = self.run_main("concat", "--folder", str(self.root))

        self.assertEqual(code, 0)
        self.assertEqual(page_numbers(self.root / "concatenated_folder_pdfs.pdf"), [3, 4])

    def test_concat_of_invalid_files_fails(self):
        bad = self.root / "bad.pdf"
        bad.write_bytes(b"junk")

        code, out, _ = self.run_main("concat", str(bad), "-o", str(self.root / "merged.pdf"))

        self.assertEqual(code, 1)
        self.assertIn("✗", out)

    def test_validate_reports_each_file(self):
        good = make_pdf(self.root / "good.pdf", 2)
        empty = self.root / "empty.pdf"
        empty.write_bytes(b"")

        code, out, _ = self.run_main("validate", str(good), str(empty))

        self.assertEqual(code, 1)
        self.assertIn("VALID    ", out)
        self.assertIn("(2 pages)", out)
        self.assertIn("INVALID  ", out)

    def test_bad_config_file(self):
        self.config.write_text("unknown_setting: 1\n", encoding="utf-8")
        code, _, err = self.run_main("validate", str(self.root / "x.pdf"))
        self.assertEqual(code, 2)
        self.assertIn("Unknown settings", err)

    def test_malformed_config_file(self):
        self.config.write_text("producer: [unclosed\n", encoding="utf-8")
        code, _, err = self.run_main("validate", str(self.root / "x.pdf"))
        self.assertEqual(code, 2)
        self.assertIn("Invalid YAML", err)

    def test_split_title_with_unknown_placeholder_in_config(self):
        self.config.write_text("split_title: '{name}'\n", encoding="utf-8")
        source = make_pdf(self.root / "book.pdf", 2)
        code, _, err = self.run_main("split", str(source), "--pages", "1", "--output-dir", str(self.root / "pages"))
        self.assertEqual(code, 2)
        self.assertIn("split_title", err)
        self.assertFalse((self.root / "pages").exists())

    def test_parser_defaults_to_interactive(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.command)


if __name__ == "__main__":
    unittest.main()

import io
import shutil
import unittest
import uuid
from pathlib import Path
from unittest import mock

from textpdf.cli import build_parser, main
from textpdf.writer import render_pdf


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp_root = Path(__file__).resolve().parents[1] / ".test_scratch"
        self.tmp_root.mkdir(parents=True, exist_ok=True)
        self.out_dir = self.tmp_root / f"cli_{uuid.uuid4().hex}"

    def tearDown(self):
        shutil.rmtree(self.out_dir, ignore_errors=True)
        if self.tmp_root.exists() and not any(self.tmp_root.iterdir()):
            shutil.rmtree(self.tmp_root, ignore_errors=True)

    def test_default_output_path(self):
        args = build_parser().parse_args(["Hello"])
        self.assertEqual(args.output, "manual.pdf")
        self.assertEqual(args.log_level, "INFO")

    def test_writes_pdf(self):
        out_pdf = self.out_dir / "hello.pdf"
        code = main(["Hello", "-o", str(out_pdf), "--log-level", "WARNING"])
        self.assertEqual(code, 0)
        self.assertEqual(out_pdf.read_bytes(), render_pdf("Hello"))

    def test_reads_stdin(self):
        out_pdf = self.out_dir / "stdin.pdf"
        with mock.patch("sys.stdin", io.StringIO("Hello\n")):
            code = main(["--stdin", "-o", str(out_pdf), "--log-level", "WARNING"])
        self.assertEqual(code, 0)
        self.assertEqual(out_pdf.read_bytes(), render_pdf("Hello"))

    def test_build_error_returns_1(self):
        out_pdf = self.out_dir / "bad.pdf"
        code = main(["héllo", "-o", str(out_pdf), "--log-level", "CRITICAL"])
        self.assertEqual(code, 1)
        self.assertFalse(out_pdf.exists())

    def test_missing_text_is_usage_error(self):
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_text_and_stdin_conflict(self):
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["Hello", "--stdin"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()

import shutil
import unittest
import uuid
from pathlib import Path

from textpdf.errors import SinkCreateError, SinkPositionError, SinkWriteError
from textpdf.sink import FileSink, MemorySink, Sink, atomic_file_sink


class TestSinks(unittest.TestCase):
    def setUp(self):
        self.tmp_root = Path(__file__).resolve().parents[1] / ".test_scratch"
        self.tmp_root.mkdir(parents=True, exist_ok=True)
        self.root = self.tmp_root / f"sink_{uuid.uuid4().hex}"
        self.root.mkdir()

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)
        if self.tmp_root.exists() and not any(self.tmp_root.iterdir()):
            shutil.rmtree(self.tmp_root, ignore_errors=True)

    def test_memory_sink_position_tracks_writes(self):
        sink = MemorySink.create()
        self.assertEqual(sink.position(), 0)
        sink.write(b"%PDF-1.4\n")
        self.assertEqual(sink.position(), 9)
        self.assertEqual(sink.getvalue(), b"%PDF-1.4\n")

    def test_file_sink_position_includes_buffered_bytes(self):
        sink = FileSink.create(self.root / "out.bin")
        try:
            sink.write(b"abc")
            sink.write(b"defg")
            self.assertEqual(sink.position(), 7)
        finally:
            sink.close()
        self.assertEqual((self.root / "out.bin").read_bytes(), b"abcdefg")

    def test_create_failure_is_typed(self):
        with self.assertRaises(SinkCreateError):
            FileSink.create(self.root)

    def test_closed_sink_errors_are_typed(self):
        sink = FileSink.create(self.root / "closed.bin")
        sink.close()
        with self.assertRaises(SinkWriteError):
            sink.write(b"x")
        with self.assertRaises(SinkPositionError):
            sink.position()

    def test_atomic_sink_promotes_on_success(self):
        target = self.root / "nested" / "doc.pdf"
        with atomic_file_sink(target) as sink:
            sink.write(b"data")
            self.assertFalse(target.exists())
        self.assertEqual(target.read_bytes(), b"data")
        self.assertEqual([p.name for p in target.parent.iterdir()], ["doc.pdf"])

    def test_atomic_sink_cleans_up_on_failure(self):
        target = self.root / "doc.pdf"
        with self.assertRaises(RuntimeError):
            with atomic_file_sink(target) as sink:
                sink.write(b"partial")
                raise RuntimeError("interrupted")
        self.assertEqual(list(self.root.iterdir()), [])

    def test_atomic_sink_removes_directories_it_created(self):
        target = self.root / "a" / "b" / "doc.pdf"
        with self.assertRaises(RuntimeError):
            with atomic_file_sink(target) as sink:
                sink.write(b"partial")
                raise RuntimeError("interrupted")
        self.assertFalse((self.root / "a").exists())
        self.assertTrue(self.root.exists())

    def test_sink_without_position_cannot_be_built(self):
        class WriteOnlySink(Sink):
            def write(self, data: bytes) -> None:
                pass

        with self.assertRaises(TypeError):
            WriteOnlySink()

    def test_atomic_sink_create_failure(self):
        blocker = self.root / "file"
        blocker.write_bytes(b"")
        with self.assertRaises(SinkCreateError):
            with atomic_file_sink(blocker / "doc.pdf"):
                pass


if __name__ == "__main__":
    unittest.main()

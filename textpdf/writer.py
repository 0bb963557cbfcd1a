from __future__ import annotations

import logging
from pathlib import Path

from .constants import DEFAULT_OUTPUT_PATH, EOF_MARKER
from .document import Document, PDFObject
from .errors import PDFBuildError
from .sink import MemorySink, Sink, atomic_file_sink
from .xref import CrossReferenceTableBuilder, TrailerEmitter

log = logging.getLogger(__name__)


class PDFWriter:
    """
    Stream a ``Document`` into a sink in one pass.

    Phases run once each, in order: header, objects, xref, trailer,
    startxref, EOF marker. Offsets are read from the sink right before
    each object is written, so they are absolute byte positions.
    """

    def __init__(self, sink: Sink):
        self.sink = sink
        self.offsets: dict[int, int] = {}
        self.xref_offset: int | None = None
        self._used = False

    def _write_raw(self, data: bytes) -> None:
        self.sink.write(data)

    def _write_obj(self, obj: PDFObject) -> None:
        ref = obj.ref
        offset = self.sink.position()
        self.offsets[ref.obj_id] = offset
        log.debug("object %d at offset %d", ref.obj_id, offset)
        self._write_raw(b"%d %d obj\n" % (ref.obj_id, ref.generation))
        self._write_raw(obj.body())
        self._write_raw(b"endobj\n")

    def write(self, document: Document) -> None:
        if self._used:
            raise PDFBuildError("PDFWriter instances write a single document")
        self._used = True

        self._write_raw(document.version.header)

        for obj in document.objects():
            self._write_obj(obj)

        xref = CrossReferenceTableBuilder(self.offsets)
        xref_offset = self.sink.position()
        log.debug("xref at offset %d", xref_offset)
        self._write_raw(xref.build())

        trailer = TrailerEmitter(size=xref.size, root=document.root)
        self._write_raw(trailer.trailer())
        self._write_raw(trailer.startxref(xref_offset))
        self._write_raw(EOF_MARKER)
        self.xref_offset = xref_offset


def render_pdf(text: str) -> bytes:
    """Build the one-page document for ``text`` and return its bytes."""
    document = Document.from_text(text)
    sink = MemorySink.create()
    PDFWriter(sink).write(document)
    return sink.getvalue()


def create_pdf(text: str, out_path: str | Path = DEFAULT_OUTPUT_PATH) -> Path:
    """
    Write the one-page document for ``text`` to ``out_path``.

    The document is assembled (and the text validated) before any file is
    touched. Output goes to a temporary file that replaces ``out_path`` only
    after every byte was written, so a failed build leaves no partial PDF.
    Raises a ``PDFBuildError`` subclass on failure.
    """
    out_path = Path(out_path)
    document = Document.from_text(text)
    with atomic_file_sink(out_path) as sink:
        writer = PDFWriter(sink)
        writer.write(document)
        size = sink.position()
    log.info("PDF: %s (%d objects, %d bytes)", out_path.resolve(), len(writer.offsets), size)
    return out_path

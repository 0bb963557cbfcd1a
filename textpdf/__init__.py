"""Minimal one-page PDF writer: object graph, serializer, xref and trailer."""

from .document import Document, PDFVersion
from .errors import (
    DocumentStructureError,
    PDFBuildError,
    SinkCreateError,
    SinkPositionError,
    SinkWriteError,
    TextEncodingError,
)
from .objects import ObjectAllocator, ObjectRef
from .version import __version__
from .writer import PDFWriter, create_pdf, render_pdf

__all__ = [
    "Document",
    "DocumentStructureError",
    "ObjectAllocator",
    "ObjectRef",
    "PDFBuildError",
    "PDFVersion",
    "PDFWriter",
    "SinkCreateError",
    "SinkPositionError",
    "SinkWriteError",
    "TextEncodingError",
    "__version__",
    "create_pdf",
    "render_pdf",
]

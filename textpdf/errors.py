from __future__ import annotations


class PDFBuildError(RuntimeError):
    """Base class for every failure that aborts a build."""


class SinkCreateError(PDFBuildError):
    pass


class SinkWriteError(PDFBuildError):
    pass


class SinkPositionError(PDFBuildError):
    pass


class DocumentStructureError(PDFBuildError):
    """The object graph is inconsistent (dangling ref, count mismatch, id gap)."""


class TextEncodingError(PDFBuildError):
    """The text cannot be represented in the built-in font encoding."""

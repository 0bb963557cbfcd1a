from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from reportlab.pdfbase import pdfmetrics

from .constants import (
    FONT_BASE_NAME,
    FONT_RESOURCE_NAME,
    FONT_SIZE,
    FONT_SUBTYPE,
    MEDIA_BOX,
    TEXT_ORIGIN,
)
from .errors import DocumentStructureError
from .objects import (
    Catalog,
    ContentStream,
    FontResource,
    ObjectAllocator,
    ObjectRef,
    Page,
    PageTree,
)

log = logging.getLogger(__name__)

PDFObject = Union[Catalog, PageTree, Page, ContentStream, FontResource]


class PDFVersion(Enum):
    PDF_1_4 = "1.4"

    @property
    def header(self) -> bytes:
        return f"%PDF-{self.value}\n".encode("ascii")


@dataclass(frozen=True)
class Document:
    """
    The fixed one-page object graph.

    Construction validates the graph, so every ``Document`` instance is
    consistent: ids are 1..N without gaps, the page tree's count matches
    its kids, and every reference resolves to an object of the document.
    """

    catalog: Catalog
    page_tree: PageTree
    page: Page
    content_stream: ContentStream
    font: FontResource
    version: PDFVersion = PDFVersion.PDF_1_4

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_text(cls, text: str) -> "Document":
        alloc = ObjectAllocator()
        catalog_ref = alloc.allocate()
        pages_ref = alloc.allocate()
        page_ref = alloc.allocate()
        contents_ref = alloc.allocate()
        font_ref = alloc.allocate()

        doc = cls(
            catalog=Catalog(ref=catalog_ref, pages_ref=pages_ref),
            page_tree=PageTree(ref=pages_ref, kids=(page_ref,), count=1),
            page=Page(
                ref=page_ref,
                parent_ref=pages_ref,
                media_box=MEDIA_BOX,
                contents_ref=contents_ref,
                font_resources={FONT_RESOURCE_NAME: font_ref},
            ),
            content_stream=ContentStream(
                ref=contents_ref, raw_text=text, font_name=FONT_RESOURCE_NAME
            ),
            font=FontResource(
                ref=font_ref,
                name=FONT_RESOURCE_NAME,
                base_font=FONT_BASE_NAME,
                subtype=FONT_SUBTYPE,
            ),
        )
        log.debug("assembled document with %d objects", alloc.allocated)
        _warn_if_text_overflows(text, MEDIA_BOX)
        return doc

    @property
    def text(self) -> str:
        return self.content_stream.raw_text

    @property
    def root(self) -> ObjectRef:
        return self.catalog.ref

    def objects(self) -> list[PDFObject]:
        """All indirect objects in ascending id order."""
        objs: list[PDFObject] = [
            self.catalog,
            self.page_tree,
            self.page,
            self.content_stream,
            self.font,
        ]
        return sorted(objs, key=lambda obj: obj.ref.obj_id)

    def validate(self) -> None:
        objs = self.objects()
        ids = [obj.ref.obj_id for obj in objs]
        if len(set(ids)) != len(ids):
            raise DocumentStructureError(f"duplicate object ids: {ids}")
        if ids != list(range(1, len(ids) + 1)):
            raise DocumentStructureError(f"object ids must be 1..{len(ids)} without gaps, got {ids}")

        if self.page_tree.count != len(self.page_tree.kids):
            raise DocumentStructureError(
                f"page tree count {self.page_tree.count} != {len(self.page_tree.kids)} kids"
            )
        if tuple(self.page_tree.kids) != (self.page.ref,):
            raise DocumentStructureError("page tree must hold exactly the one page")
        if self.catalog.pages_ref != self.page_tree.ref:
            raise DocumentStructureError("catalog does not point at the page tree")
        if self.page.parent_ref != self.page_tree.ref:
            raise DocumentStructureError("page parent is not the page tree")

        known = {obj.ref for obj in objs}
        for obj in objs:
            for ref in obj.references():
                if ref not in known:
                    raise DocumentStructureError(
                        f"object {obj.ref} references missing object {ref}"
                    )


def _warn_if_text_overflows(text: str, media_box: tuple[float, float, float, float]) -> None:
    x, _ = TEXT_ORIGIN
    width = pdfmetrics.stringWidth(text, FONT_BASE_NAME, FONT_SIZE)
    if x + width > media_box[2]:
        log.warning(
            "text is %.1fpt wide and runs past the right edge of the page (%.0fpt)",
            x + width,
            media_box[2],
        )

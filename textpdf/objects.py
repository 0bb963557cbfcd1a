from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from reportlab.lib.rl_accel import fp_str
from reportlab.pdfbase import pdfmetrics

from .content import build_text_block
from .errors import DocumentStructureError


@dataclass(frozen=True)
class ObjectRef:
    """Indirect object reference (``12 0 R``)."""

    obj_id: int
    generation: int = 0

    def __post_init__(self) -> None:
        if self.obj_id < 1:
            raise DocumentStructureError(f"object id must be >= 1, got {self.obj_id}")
        if self.generation < 0:
            raise DocumentStructureError(f"generation must be >= 0, got {self.generation}")

    def __str__(self) -> str:
        return f"{self.obj_id} {self.generation} R"

    def __bytes__(self) -> bytes:
        return str(self).encode("ascii")


class ObjectAllocator:
    """Hands out object ids in construction order: 1, 2, 3, ..."""

    def __init__(self) -> None:
        self._next_id = 1

    def allocate(self) -> ObjectRef:
        ref = ObjectRef(self._next_id)
        self._next_id += 1
        return ref

    @property
    def allocated(self) -> int:
        return self._next_id - 1


@dataclass(frozen=True)
class Catalog:
    ref: ObjectRef
    pages_ref: ObjectRef

    def references(self) -> list[ObjectRef]:
        return [self.pages_ref]

    def body(self) -> bytes:
        return b"<< /Type /Catalog /Pages %s >>\n" % bytes(self.pages_ref)


@dataclass(frozen=True)
class PageTree:
    ref: ObjectRef
    kids: tuple[ObjectRef, ...]
    count: int

    def references(self) -> list[ObjectRef]:
        return list(self.kids)

    def body(self) -> bytes:
        kids = b" ".join(bytes(kid) for kid in self.kids)
        return b"<< /Type /Pages /Kids [%s] /Count %d >>\n" % (kids, self.count)


@dataclass(frozen=True)
class Page:
    ref: ObjectRef
    parent_ref: ObjectRef
    media_box: tuple[float, float, float, float]
    contents_ref: ObjectRef
    # Accepts a name -> font mapping; stored as (name, ref) pairs.
    font_resources: Union[Mapping[str, ObjectRef], tuple[tuple[str, ObjectRef], ...]] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "font_resources", tuple(dict(self.font_resources).items()))

    def references(self) -> list[ObjectRef]:
        return [self.parent_ref, self.contents_ref, *(ref for _, ref in self.font_resources)]

    def body(self) -> bytes:
        fonts = " ".join(f"/{name} {ref}" for name, ref in self.font_resources)
        return (
            f"<< /Type /Page /Parent {self.parent_ref}"
            f" /MediaBox [{fp_str(*self.media_box)}]"
            f" /Contents {self.contents_ref}"
            f" /Resources << /Font << {fonts} >> >> >>\n"
        ).encode("ascii")


@dataclass(frozen=True)
class ContentStream:
    ref: ObjectRef
    raw_text: str
    font_name: str
    data: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Encoding errors surface when the document is assembled, not mid-write.
        object.__setattr__(self, "data", build_text_block(self.raw_text, font_name=self.font_name))

    @property
    def length(self) -> int:
        return len(self.data)

    def references(self) -> list[ObjectRef]:
        return []

    def body(self) -> bytes:
        return b"<< /Length %d >>\nstream\n" % self.length + self.data + b"endstream\n"


@dataclass(frozen=True)
class FontResource:
    """A built-in (standard 14), non-embedded Type1 font."""

    ref: ObjectRef
    name: str
    base_font: str
    subtype: str = "Type1"

    def __post_init__(self) -> None:
        if self.base_font not in pdfmetrics.standardFonts:
            raise DocumentStructureError(
                f"{self.base_font!r} is not one of the standard built-in fonts"
            )

    def references(self) -> list[ObjectRef]:
        return []

    def body(self) -> bytes:
        return (
            f"<< /Type /Font /Subtype /{self.subtype} /BaseFont /{self.base_font} >>\n"
        ).encode("ascii")

from __future__ import annotations

from typing import Mapping

from .constants import FREE_ENTRY_GENERATION
from .errors import DocumentStructureError
from .objects import ObjectRef

_MAX_XREF_OFFSET = 10**10 - 1


class CrossReferenceTableBuilder:
    """
    Build a single xref subsection covering objects 0..N.

    Each entry is fixed width: a 10-digit offset, a 5-digit generation
    and a one-letter flag, terminated by a newline.
    """

    def __init__(self, offsets: Mapping[int, int]):
        ids = sorted(offsets)
        if ids != list(range(1, len(ids) + 1)):
            raise DocumentStructureError(f"xref needs contiguous object ids from 1, got {ids}")
        self._offsets = [offsets[obj_id] for obj_id in ids]

    @property
    def size(self) -> int:
        # The free entry for object 0 takes a slot too.
        return len(self._offsets) + 1

    def build(self) -> bytes:
        lines = [
            b"xref\n",
            b"0 %d\n" % self.size,
            b"%010d %05d f\n" % (0, FREE_ENTRY_GENERATION),
        ]
        for offset in self._offsets:
            if not 0 <= offset <= _MAX_XREF_OFFSET:
                raise DocumentStructureError(f"offset {offset} does not fit an xref entry")
            lines.append(b"%010d 00000 n\n" % offset)
        return b"".join(lines)


class TrailerEmitter:
    def __init__(self, size: int, root: ObjectRef):
        self.size = size
        self.root = root

    def trailer(self) -> bytes:
        return b"trailer\n<< /Size %d /Root %s >>\n" % (self.size, bytes(self.root))

    def startxref(self, xref_offset: int) -> bytes:
        return b"startxref\n%d\n" % xref_offset

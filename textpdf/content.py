from __future__ import annotations

from .constants import FONT_RESOURCE_NAME, FONT_SIZE, TEXT_ORIGIN
from .errors import TextEncodingError

_LITERAL_ESCAPES = {
    ord("\\"): b"\\\\",
    ord("("): b"\\(",
    ord(")"): b"\\)",
    ord("\n"): b"\\n",
    ord("\r"): b"\\r",
    ord("\t"): b"\\t",
    ord("\b"): b"\\b",
    ord("\f"): b"\\f",
}


def encode_pdf_text(text: str) -> bytes:
    """
    Encode text for a literal string shown with a built-in font.

    The font dictionary carries no /Encoding entry, so only ASCII maps
    to the same glyphs under the font's StandardEncoding.
    """
    try:
        return text.encode("ascii")
    except UnicodeEncodeError as exc:
        bad = text[exc.start:exc.end]
        raise TextEncodingError(
            f"cannot encode {bad!r} at position {exc.start}: only ASCII text is supported"
        ) from exc


def pdf_escape_literal(raw: bytes) -> bytes:
    # PDF literal string escaping; other control bytes become \ddd.
    out = bytearray()
    for byte in raw:
        escaped = _LITERAL_ESCAPES.get(byte)
        if escaped is not None:
            out += escaped
        elif byte < 0x20 or byte == 0x7F:
            out += b"\\%03o" % byte
        else:
            out.append(byte)
    return bytes(out)


def build_text_block(
    text: str,
    font_name: str = FONT_RESOURCE_NAME,
    font_size: int = FONT_SIZE,
    origin: tuple[int, int] = TEXT_ORIGIN,
) -> bytes:
    """Return the BT/ET operator block that shows ``text`` on one line."""
    literal = pdf_escape_literal(encode_pdf_text(text))
    x, y = origin
    return b"".join(
        [
            b"BT\n",
            b"/%s %d Tf\n" % (font_name.encode("ascii"), font_size),
            b"%d %d Td\n" % (x, y),
            b"(" + literal + b") Tj\n",
            b"ET\n",
        ]
    )

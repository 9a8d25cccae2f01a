"""
BFF file reader.

Parses a compiled BFF file back into its header fields and glyph rows, e.g.
to check what the compiler produced.
"""

import struct
from dataclasses import dataclass, field

from .encoder import BFF_MAGIC, BFF_VERSION, ROW_FORMATS

_HEADER_FORMAT = "<BBBBBBBB"
_HEADER_SIZE = len(BFF_MAGIC) + struct.calcsize(_HEADER_FORMAT)


@dataclass
class BFFFont:
    """
    Attributes:
        charset_tag: Charset tag byte (0 = ASCII)
        width: Glyph width in pixels (row size in bits)
        height: Glyph height in rows
        default_color: (r, g, b)
        name: Font name without the NUL terminator
        glyphs: {index: tuple of row values}, in file order
    """

    version: int
    charset_tag: int
    width: int
    height: int
    default_color: tuple[int, int, int]
    name: str
    glyphs: dict[int, tuple[int, ...]] = field(default_factory=dict)

    @property
    def glyph_count(self) -> int:
        return len(self.glyphs)


def read_bff(data: bytes) -> BFFFont:
    """
    Parse a BFF file.

    Raises:
        ValueError: If the data is not a valid BFF font
    """
    if data[:len(BFF_MAGIC)] != BFF_MAGIC:
        raise ValueError("Invalid BFF font file")
    if len(data) < _HEADER_SIZE:
        raise ValueError("Truncated BFF header")

    (version, charset_tag, width, height, count,
     r, g, b) = struct.unpack_from(_HEADER_FORMAT, data, len(BFF_MAGIC))
    if version != BFF_VERSION:
        raise ValueError(f"Unsupported BFF version {version}")
    if width not in ROW_FORMATS:
        raise ValueError(f"Unsupported BFF font width {width}")

    name_end = data.find(b"\0", _HEADER_SIZE)
    if name_end == -1:
        raise ValueError("Font name is not NUL-terminated")
    name = data[_HEADER_SIZE:name_end].decode("ascii")

    font = BFFFont(version, charset_tag, width, height, (r, g, b), name)

    row_format = ROW_FORMATS[width]
    row_size = struct.calcsize(row_format)
    record_size = 1 + height * row_size
    offset = name_end + 1
    for _ in range(count):
        if offset + record_size > len(data):
            raise ValueError("Truncated glyph record")
        index = data[offset]
        rows = tuple(
            struct.unpack_from(row_format, data, offset + 1 + i * row_size)[0]
            for i in range(height)
        )
        if index in font.glyphs:
            raise ValueError(f"Duplicate glyph index {index}")
        font.glyphs[index] = rows
        offset += record_size

    if offset != len(data):
        raise ValueError(f"{len(data) - offset} trailing bytes after the last glyph")
    return font


def load_bff(path) -> BFFFont:
    with open(path, "rb") as f:
        return read_bff(f.read())

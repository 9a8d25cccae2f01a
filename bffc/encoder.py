"""
BFF encoder.

BFF layout (little-endian):
    magic:        2 bytes (0xBF 0xFF)
    version:      1 byte (1)
    charset:      1 byte (tag from charsets.yaml, 0 = ASCII)
    font width:   1 byte (8, 16, 32 or 64)
    font height:  1 byte
    glyph count:  1 byte (patched once all glyphs are written)
    default RGB:  3 bytes
    font name:    ASCII, NUL-terminated

    Glyph records, in source order:
        index: 1 byte
        rows:  font_height * (font_width / 8) bytes, each row little-endian
"""

import io
import os
import stat
import struct
import tempfile
from pathlib import Path
from typing import Iterable

from .context import CompileContext
from .glyphs import GlyphRecord
from .project import ProjectConfig

BFF_MAGIC = b"\xbf\xff"
BFF_VERSION = 1
GLYPH_COUNT_OFFSET = 6
MAX_GLYPH_COUNT = 0xFF

ROW_FORMATS = {
    8: "<B",
    16: "<H",
    32: "<I",
    64: "<Q",
}


def encode_header(config: ProjectConfig) -> bytes:
    header = BFF_MAGIC + struct.pack(
        "<BBBBBBBB",
        BFF_VERSION,
        config.charset.tag,
        config.font_width,
        config.font_height,
        0,  # glyph count, patched later
        *config.default_color,
    )
    return header + config.font_name.encode("ascii") + b"\0"


def encode_glyph(glyph: GlyphRecord, config: ProjectConfig) -> bytes:
    row_format = ROW_FORMATS[config.font_width]
    return bytes([glyph.index]) + b"".join(struct.pack(row_format, row) for row in glyph.rows)


def encode_bff(
    config: ProjectConfig, glyphs: Iterable[GlyphRecord], context: CompileContext | None = None
) -> bytes:
    """
    Encode a complete BFF file.

    The header goes out first with a zero glyph count; once the glyph stream
    is exhausted the count byte is overwritten in place. Nothing is returned
    if the stream raises, so a failed run never yields a partial font.
    """
    if context is None:
        context = CompileContext()

    buf = io.BytesIO()
    buf.write(encode_header(config))

    count = 0
    for glyph in glyphs:
        count += 1
        if count > MAX_GLYPH_COUNT:
            context.fail(f"Too many glyphs: a BFF font holds at most {MAX_GLYPH_COUNT}")
        buf.write(encode_glyph(glyph, config))

    buf.seek(GLYPH_COUNT_OFFSET)
    buf.write(bytes([count]))
    return buf.getvalue()


def _output_mode(path: Path) -> int:
    """Permissions a plain open(path, "wb") would leave on the file."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_bff(
    path: Path, config: ProjectConfig, glyphs: Iterable[GlyphRecord], context: CompileContext | None = None
) -> int:
    """
    Encode and write a BFF file, returning the glyph count.

    The file is written to a temporary sibling and moved over `path` only
    after encoding succeeded.
    """
    data = encode_bff(config, glyphs, context)
    path = Path(path)
    mode = _output_mode(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    return data[GLYPH_COUNT_OFFSET]

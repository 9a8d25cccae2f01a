"""
Glyph source parser.

Each data line defines one glyph as its character followed by one binary
literal per row:

    A=0b00011000,0b00100100,...

Every row must have exactly FONT_WIDTH digits and every glyph exactly
FONT_HEIGHT rows. Any violation is fatal for the whole file, because the
encoder writes fixed-size records.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from .context import CompileContext
from .directives import COMMENT_PREFIX
from .project import ProjectConfig

BINARY_PREFIX = "0b"


@dataclass(frozen=True)
class GlyphRecord:
    index: int
    rows: tuple[int, ...]


def parse_row(token: str, width: int, context: CompileContext, line_no: int) -> int:
    """Decode one binary row literal, MSB = left-most pixel."""
    token = token.strip()
    if token.startswith(BINARY_PREFIX):
        token = token[len(BINARY_PREFIX):]

    if len(token) != width:
        context.fail(f"Font width mismatch: expected {width}, got {len(token)}", line_no)
    if token.strip("01"):
        context.fail(f"Invalid value detected: {token} is not a binary value", line_no)
    return int(token, 2)


def parse_glyph_line(
    line: str, config: ProjectConfig, context: CompileContext, line_no: int
) -> GlyphRecord | None:
    """Parse one data line. Returns None for lines that are skipped."""
    char = line[0]
    try:
        index = config.charset.encode(char)
    except ValueError:
        context.fail(f"Glyph {char!r} cannot be encoded in charset {config.charset.name}", line_no)

    if index in context.used_indices:
        context.warning(f"Glyph for {char} is already defined", line_no)
        return None

    eq = line.find("=")
    if eq == -1:
        context.warning(f"Syntax error: {line} is not a valid format", line_no)
        return None
    if eq == 0:
        # '=' is itself the glyph character, the separator follows it
        eq = 1

    context.debug(f"Compiling for char {char}...", line_no)
    tokens = line[eq + 1:].split(",")
    rows = tuple(parse_row(token, config.font_width, context, line_no) for token in tokens)

    if len(rows) != config.font_height:
        context.fail(
            f"Binary is missing for {char}, expected {config.font_height} rows but got {len(rows)}",
            line_no,
        )

    context.used_indices.append(index)
    return GlyphRecord(index, rows)


def parse_glyph_lines(
    lines: Iterable[str], config: ProjectConfig, context: CompileContext
) -> Iterator[GlyphRecord]:
    """Yield glyph records in file order."""
    for line_no, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        glyph = parse_glyph_line(line, config, context, line_no)
        if glyph is not None:
            yield glyph


def read_glyphs(config: ProjectConfig, context: CompileContext) -> Iterator[GlyphRecord]:
    """Stream glyph records from the project's font data file."""
    with open(config.font_data_path, encoding="utf-8-sig", errors="replace") as f:
        yield from parse_glyph_lines(f, config, context)

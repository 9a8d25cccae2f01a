"""
Parser for line-oriented KEY=VALUE descriptor files.

Both the project file and the comment/blank-line conventions of the glyph
source follow this format:

    // comment
    CHARSET=ASCII
    FONT_WIDTH=8

Malformed lines are diagnosed and skipped; nothing in here is fatal.
"""

from pathlib import Path
from typing import Iterable

from .context import CompileContext

COMMENT_PREFIX = "//"


def is_skipped_line(line: str) -> bool:
    """Blank lines and // comments carry no directive."""
    return not line.strip() or line.startswith(COMMENT_PREFIX)


def parse_directives(lines: Iterable[str], context: CompileContext | None = None) -> dict[str, str]:
    """
    Parse KEY=VALUE lines into an ordered mapping.

    The first occurrence of a key wins; later duplicates are reported as
    errors and dropped. Lines without '=' (or with an empty key) are
    reported as warnings and dropped.
    """
    if context is None:
        context = CompileContext()

    directives = {}
    for line_no, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if is_skipped_line(line):
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            context.warning(f"Unparsed key: {line}", line_no)
            continue
        value = value.strip()

        if key in directives:
            context.error(
                f"Duplicated key {key} is already declared; new value will be ignored", line_no
            )
            continue

        directives[key] = value
        context.debug(f"Found key-value pair: key {key}, value {value}", line_no)

    return directives


def format_directives(directives: dict[str, str]) -> list[str]:
    """Serialize a directive mapping back into KEY=VALUE lines."""
    return [f"{key}={value}" for key, value in directives.items()]


def read_directives(path: Path, context: CompileContext | None = None) -> dict[str, str]:
    with open(path, encoding="utf-8-sig", errors="replace") as f:
        return parse_directives(f, context)

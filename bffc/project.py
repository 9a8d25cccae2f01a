"""Typed, validated view over a project file's directives."""

import re
from dataclasses import dataclass
from pathlib import Path

from .charsets import Charset, get_charset
from .context import CompileContext
from .directives import read_directives

FONT_DATA_SUFFIX = ".rbf"
SUPPORTED_WIDTHS = (8, 16, 32, 64)
DEFAULT_COLOR_COMPONENT = 255
DEFAULT_FONT_NAME = "FONT"

_UINT8_RE = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class ProjectConfig:
    charset: Charset
    font_width: int
    font_height: int
    default_color: tuple[int, int, int]
    font_name: str
    font_data_path: Path
    project_path: Path


def parse_uint8(text: str) -> int | None:
    """Parse an unsigned 8-bit decimal value, or return None."""
    text = text.strip()
    if not _UINT8_RE.fullmatch(text):
        return None
    value = int(text)
    if value > 0xFF:
        return None
    return value


def resolve_font_data_path(
    directives: dict[str, str], project_path: Path, context: CompileContext
) -> Path:
    font_file = directives.get("FONT_FILE")
    if font_file is None:
        font_file = project_path.stem + FONT_DATA_SUFFIX
        context.warning(f"FONT_FILE is not set. Trying {font_file}")

    path = Path(font_file)
    if not path.is_absolute():
        path = project_path.parent / path

    if not path.is_file():
        context.fail(f"Font file {path} not found")
    context.info(f"FONT_FILE:{path}")
    return path


def resolve_charset(directives: dict[str, str], context: CompileContext) -> Charset:
    raw = directives.get("CHARSET")
    if raw is None:
        context.fail("Font parameter CHARSET not found")

    name = raw.upper()
    charset = get_charset(name)
    if charset is None:
        context.fail(f"Unsupported/unimplemented CHARSET found: {name} is not supported")
    context.info(f"CHARSET:{charset.name}")
    return charset


def _resolve_required_uint8(key: str, directives: dict[str, str], context: CompileContext) -> int:
    raw = directives.get(key)
    if raw is None:
        context.fail(f"Font parameter {key} not found")
    value = parse_uint8(raw)
    if value is None:
        context.fail(f"Invalid {key} found: {raw} is not a valid UInt8 value")
    return value


def resolve_font_width(directives: dict[str, str], context: CompileContext) -> int:
    width = _resolve_required_uint8("FONT_WIDTH", directives, context)
    if width not in SUPPORTED_WIDTHS:
        context.fail(f"Unsupported/unimplemented FONT_WIDTH found: {width} is not supported")
    context.info(f"FONT_WIDTH:{width}")
    return width


def resolve_font_height(directives: dict[str, str], context: CompileContext) -> int:
    height = _resolve_required_uint8("FONT_HEIGHT", directives, context)
    context.info(f"FONT_HEIGHT:{height}")
    return height


def resolve_default_color(directives: dict[str, str], context: CompileContext) -> tuple[int, int, int]:
    """Each of DEFAULT_RGB_R/G/B falls back to 255 on its own."""
    color = []
    for channel in "RGB":
        key = f"DEFAULT_RGB_{channel}"
        raw = directives.get(key)
        if raw is None:
            context.info(f"{key} is not set. Set to default value {DEFAULT_COLOR_COMPONENT}")
            color.append(DEFAULT_COLOR_COMPONENT)
            continue

        value = parse_uint8(raw)
        if value is None:
            context.warning(
                f"Invalid {key} found: {raw} is not a valid UInt8 value. "
                f"Set to default value {DEFAULT_COLOR_COMPONENT}"
            )
            value = DEFAULT_COLOR_COMPONENT
        else:
            context.info(f"{key}:{value}")
        color.append(value)
    return tuple(color)


def resolve_font_name(directives: dict[str, str], context: CompileContext) -> str:
    name = directives.get("FONT_NAME")
    if name is None:
        context.info(f'FONT_NAME is not set. Set to default value "{DEFAULT_FONT_NAME}"')
        name = DEFAULT_FONT_NAME

    if not name.isascii() or "\0" in name:
        context.fail(f"Invalid FONT_NAME found: {name!r} must be ASCII without NUL characters")
    context.info(f"FONT_NAME:{name}")
    return name


def resolve_project(
    directives: dict[str, str], project_path: Path, context: CompileContext | None = None
) -> ProjectConfig:
    """
    Resolve every project field or fail.

    The font data file is checked first so a missing glyph source stops the
    run before anything else is validated.
    """
    if context is None:
        context = CompileContext()
    project_path = Path(project_path)

    font_data_path = resolve_font_data_path(directives, project_path, context)
    charset = resolve_charset(directives, context)
    font_width = resolve_font_width(directives, context)
    font_height = resolve_font_height(directives, context)
    default_color = resolve_default_color(directives, context)
    font_name = resolve_font_name(directives, context)

    return ProjectConfig(
        charset=charset,
        font_width=font_width,
        font_height=font_height,
        default_color=default_color,
        font_name=font_name,
        font_data_path=font_data_path,
        project_path=project_path,
    )


def load_project(project_path: Path, context: CompileContext | None = None) -> ProjectConfig:
    if context is None:
        context = CompileContext()
    directives = read_directives(project_path, context)
    return resolve_project(directives, project_path, context)

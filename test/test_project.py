"""Tests for resolving a ProjectConfig from directives."""

import logging

import pytest

from bffc.context import CompileError
from bffc.project import load_project, parse_uint8, resolve_project

BASE = {
    "CHARSET": "ascii",
    "FONT_WIDTH": "8",
    "FONT_HEIGHT": "2",
    "FONT_FILE": "g.rbf",
}


@pytest.fixture
def project_path(tmp_path):
    (tmp_path / "g.rbf").write_text("A=00000000,11111111\n")
    return tmp_path / "font.bfp"


def resolve(project_path, context, **overrides):
    directives = dict(BASE)
    for key, value in overrides.items():
        if value is None:
            directives.pop(key, None)
        else:
            directives[key] = value
    return resolve_project(directives, project_path, context)


@pytest.mark.parametrize("text, expected", [
    ("0", 0),
    ("255", 255),
    (" 42 ", 42),
    ("+7", 7),
    ("007", 7),
    ("256", None),
    ("-1", None),
    ("", None),
    ("8px", None),
    ("0x10", None),
    ("-0", None),
])
def test_parse_uint8(text, expected):
    assert parse_uint8(text) == expected


def test_defaults(project_path, context):
    config = resolve(project_path, context)
    assert config.charset.name == "ASCII"
    assert config.charset.tag == 0
    assert config.font_width == 8
    assert config.font_height == 2
    assert config.default_color == (255, 255, 255)
    assert config.font_name == "FONT"
    assert config.font_data_path == project_path.parent / "g.rbf"


def test_charset_is_case_insensitive(project_path, context):
    assert resolve(project_path, context, CHARSET="AsCiI").charset.name == "ASCII"


@pytest.mark.parametrize("width", ["8", "16", "32", "64"])
def test_supported_widths(project_path, context, width):
    assert resolve(project_path, context, FONT_WIDTH=width).font_width == int(width)


@pytest.mark.parametrize("width", ["0", "12", "24", "128", "300", "wide", ""])
def test_unsupported_width_is_fatal(project_path, context, width):
    with pytest.raises(CompileError):
        resolve(project_path, context, FONT_WIDTH=width)
    assert context.has_fatal()


@pytest.mark.parametrize("key", ["CHARSET", "FONT_WIDTH", "FONT_HEIGHT"])
def test_missing_required_field_is_fatal(project_path, context, key):
    with pytest.raises(CompileError, match=key):
        resolve(project_path, context, **{key: None})


@pytest.mark.parametrize("height", ["0", "1", "200", "255"])
def test_any_uint8_height_is_accepted(project_path, context, height):
    assert resolve(project_path, context, FONT_HEIGHT=height).font_height == int(height)


@pytest.mark.parametrize("height", ["256", "-2", "tall"])
def test_invalid_height_is_fatal(project_path, context, height):
    with pytest.raises(CompileError, match="FONT_HEIGHT"):
        resolve(project_path, context, FONT_HEIGHT=height)


def test_unsupported_charset_is_fatal(project_path, context):
    with pytest.raises(CompileError, match="UTF8"):
        resolve(project_path, context, CHARSET="UTF8")


def test_missing_font_file_is_checked_first(project_path, context):
    # CHARSET is invalid too, but the font file check runs before it
    with pytest.raises(CompileError, match="missing.rbf"):
        resolve(project_path, context, FONT_FILE="missing.rbf", CHARSET="UTF8")


def test_font_file_defaults_to_project_stem(tmp_path, context):
    (tmp_path / "myfont.rbf").write_text("")
    config = resolve(tmp_path / "myfont.bfp", context, FONT_FILE=None)
    assert config.font_data_path == tmp_path / "myfont.rbf"
    assert any("FONT_FILE is not set" in m for m in context.messages(logging.WARNING))


def test_absolute_font_file(tmp_path, project_path, context):
    other = tmp_path / "elsewhere"
    other.mkdir()
    glyphs = other / "x.rbf"
    glyphs.write_text("")
    config = resolve(project_path, context, FONT_FILE=str(glyphs))
    assert config.font_data_path == glyphs


def test_partial_default_color(project_path, context):
    config = resolve(project_path, context, DEFAULT_RGB_R="10")
    assert config.default_color == (10, 255, 255)


def test_unparsable_color_falls_back_with_warning(project_path, context):
    config = resolve(project_path, context, DEFAULT_RGB_R="1", DEFAULT_RGB_G="green", DEFAULT_RGB_B="300")
    assert config.default_color == (1, 255, 255)
    warnings = context.messages(logging.WARNING)
    assert any("DEFAULT_RGB_G" in m for m in warnings)
    assert any("DEFAULT_RGB_B" in m for m in warnings)
    assert not context.has_fatal()


def test_font_name(project_path, context):
    assert resolve(project_path, context, FONT_NAME="Foo").font_name == "Foo"


def test_non_ascii_font_name_is_fatal(project_path, context):
    with pytest.raises(CompileError, match="FONT_NAME"):
        resolve(project_path, context, FONT_NAME="Schriftä")


def test_unknown_keys_are_ignored(project_path, context):
    config = resolve(project_path, context, AUTHOR="someone")
    assert config.font_name == "FONT"


def test_load_project(write_project, context):
    project = write_project(
        ["// demo", "CHARSET=ascii", "FONT_WIDTH=16", "FONT_HEIGHT=3", "FONT_FILE=g.rbf", "FONT_NAME=Demo"],
        glyph_lines=[],
    )
    config = load_project(project, context)
    assert config.font_width == 16
    assert config.font_height == 3
    assert config.font_name == "Demo"
    assert config.project_path == project


def test_undecodable_font_name_is_fatal(write_project, context):
    project = write_project(
        ["CHARSET=ascii", "FONT_WIDTH=8", "FONT_HEIGHT=2", "FONT_FILE=g.rbf"],
        glyph_lines=[],
    )
    with open(project, "ab") as f:
        f.write(b"FONT_NAME=Caf\xe9\n")
    with pytest.raises(CompileError, match="FONT_NAME"):
        load_project(project, context)

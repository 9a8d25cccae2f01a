import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from bffc.charsets import get_charset
from bffc.context import CompileContext
from bffc.project import ProjectConfig


@pytest.fixture
def context():
    return CompileContext()


@pytest.fixture
def make_config(tmp_path):
    """Build a ProjectConfig directly, bypassing the project file."""

    def _make_config(width=8, height=2, color=(255, 255, 255), name="FONT"):
        font_data_path = tmp_path / "font.rbf"
        font_data_path.touch()
        return ProjectConfig(
            charset=get_charset("ASCII"),
            font_width=width,
            font_height=height,
            default_color=color,
            font_name=name,
            font_data_path=font_data_path,
            project_path=tmp_path / "font.bfp",
        )

    return _make_config


@pytest.fixture
def write_project(tmp_path):
    """Write a project file (and optionally its glyph source) into tmp_path."""

    def _write_project(directives, glyph_lines=None, name="font", glyph_file="g.rbf"):
        if glyph_lines is not None:
            (tmp_path / glyph_file).write_text("\n".join(glyph_lines) + "\n", encoding="utf-8")
        project = tmp_path / f"{name}.bfp"
        project.write_text("\n".join(directives) + "\n", encoding="utf-8")
        return project

    return _write_project

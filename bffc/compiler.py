"""The compilation pipeline: project file in, BFF file out."""

import time
from dataclasses import dataclass
from pathlib import Path

from .context import CompileContext
from .encoder import write_bff
from .glyphs import read_glyphs
from .project import load_project

OUTPUT_SUFFIX = ".bff"


@dataclass
class CompileResult:
    output_path: Path
    indices: list[int]
    characters: list[str]
    elapsed_ms: float

    @property
    def glyph_count(self) -> int:
        return len(self.indices)


def default_output_path(project_path: Path) -> Path:
    """<project-stem>.bff in the current working directory."""
    return Path(Path(project_path).stem + OUTPUT_SUFFIX)


def compile_project(
    project_path: Path, output_path: Path | None = None, context: CompileContext | None = None
) -> CompileResult:
    """
    Compile a project file into a BFF font.

    Raises CompileError on any fatal problem; in that case no output file is
    written and an existing one is left untouched.
    """
    if context is None:
        context = CompileContext()
    project_path = Path(project_path)
    if output_path is None:
        output_path = default_output_path(project_path)
    output_path = Path(output_path)

    config = load_project(project_path, context)

    if output_path.exists():
        context.warning(f"File {output_path} already exists. The file will be overwritten.")

    start = time.perf_counter()
    write_bff(output_path, config, read_glyphs(config, context), context)
    elapsed_ms = (time.perf_counter() - start) * 1000

    indices = list(context.used_indices)
    context.info(f"Wrote {len(indices)} glyphs to {output_path}")
    return CompileResult(
        output_path=output_path,
        indices=indices,
        characters=[config.charset.decode(i) for i in indices],
        elapsed_ms=elapsed_ms,
    )

"""
Bitmap Font File Compiler.

Usage:
    bffc <project file>

Reads the project file and the glyph source it names (FONT_FILE), and writes
<project stem>.bff into the current directory.
"""

import logging
import sys
from pathlib import Path

from .compiler import compile_project
from .context import CompileError

BANNER = "Bitmap Font File Compiler v1.0"
LOG_FORMAT = "%(asctime)s %(funcName)s [%(levelname)s] %(message)s"

logger = logging.getLogger(__name__)


def usage() -> str:
    return "Usage:\n\tbffc <project file>"


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        print(usage())
        sys.exit(1)

    project_path = Path(argv[0])
    if not project_path.is_file():
        print(f"File {project_path} not found. {usage()}")
        sys.exit(1)

    print(BANNER)
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    try:
        result = compile_project(project_path)
    except CompileError:
        # already reported at CRITICAL by the failing stage
        sys.exit(1)
    except OSError as e:
        logger.critical("Compilation failed: %s", e)
        sys.exit(1)

    print(
        f"Compilation succeeded. Time elapsed: {result.elapsed_ms:.3f} ms. "
        f"Compiled characters:"
    )
    print(", ".join(result.characters))


if __name__ == "__main__":
    main()

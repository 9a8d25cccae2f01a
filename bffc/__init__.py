"""Compile bitmap font projects into BFF binary fonts."""

from .compiler import CompileResult, compile_project
from .context import CompileContext, CompileError, Diagnostic
from .reader import BFFFont, load_bff, read_bff

__version__ = "1.0.0"

__all__ = [
    "BFFFont",
    "CompileContext",
    "CompileError",
    "CompileResult",
    "Diagnostic",
    "compile_project",
    "load_bff",
    "read_bff",
]

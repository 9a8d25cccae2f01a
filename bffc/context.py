"""State owned by a single compilation run."""

import logging
from dataclasses import dataclass, field

# Package logger shared by every stage through CompileContext
logger = logging.getLogger("bffc")


class CompileError(ValueError):
    """Fatal problem that aborts the whole compilation."""


@dataclass(frozen=True)
class Diagnostic:
    level: int
    message: str
    line: int | None = None


@dataclass
class CompileContext:
    """
    Mutable state of one compilation.

    Every stage records its diagnostics here instead of only logging them,
    so a caller (or a test) can inspect what happened after the run.
    `used_indices` keeps accepted glyph indices in file order; the encoder
    reads it for the glyph count and the summary.
    """

    used_indices: list[int] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    logger: logging.Logger = logger

    def report(self, level: int, message: str, line: int | None = None) -> Diagnostic:
        diagnostic = Diagnostic(level, message, line)
        self.diagnostics.append(diagnostic)
        if line is None:
            self.logger.log(level, message, stacklevel=3)
        else:
            self.logger.log(level, "%s (line %d)", message, line, stacklevel=3)
        return diagnostic

    def debug(self, message: str, line: int | None = None) -> Diagnostic:
        return self.report(logging.DEBUG, message, line)

    def info(self, message: str, line: int | None = None) -> Diagnostic:
        return self.report(logging.INFO, message, line)

    def warning(self, message: str, line: int | None = None) -> Diagnostic:
        return self.report(logging.WARNING, message, line)

    def error(self, message: str, line: int | None = None) -> Diagnostic:
        return self.report(logging.ERROR, message, line)

    def fail(self, message: str, line: int | None = None):
        """Record a fatal diagnostic and abort the compilation."""
        self.report(logging.CRITICAL, message, line)
        if line is not None:
            message = f"{message} (line {line})"
        raise CompileError(message)

    def messages(self, level: int | None = None) -> list[str]:
        return [d.message for d in self.diagnostics if level is None or d.level == level]

    def has_fatal(self) -> bool:
        return any(d.level >= logging.CRITICAL for d in self.diagnostics)

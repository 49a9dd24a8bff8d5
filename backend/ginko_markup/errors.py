"""Exceptions raised while parsing or rewriting markup documents."""
from __future__ import annotations


class MarkupError(RuntimeError):
    """Base class for failures that reject a whole document."""


class ParseError(MarkupError):
    """Raised when the source text cannot be turned into a tree."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)


class RuleError(MarkupError):
    """Raised when a rewrite rule fails while the pipeline visits a node."""

    def __init__(self, rule: str, cause: BaseException) -> None:
        self.rule = rule
        self.cause = cause
        super().__init__(f"Rule {rule} failed: {cause}")


__all__ = ["MarkupError", "ParseError", "RuleError"]

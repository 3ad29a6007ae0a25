"""
Errors raised by the generation pipeline.

Every stage raises a subclass of GenerationError; the generator logs the
error together with the file name and stage and moves on to the next file.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for errors generating a single file."""

    stage = "generation"


class TemplateError(GenerationError):
    """Raised when a template cannot be turned into source text."""

    stage = "template"


class TemplateReadError(TemplateError):
    """Raised when a template file cannot be read."""

    stage = "template-read"


class TemplateParseError(TemplateError):
    """Raised when a template has malformed syntax."""

    stage = "template-parse"


class TemplateExecutionError(TemplateError):
    """Raised when template execution fails.

    This can happen when:
    - The template references a field missing from the context
    - The template calls an unknown function
    - A function is called with incompatible arguments
    - The template attempts an operation the sandbox forbids
    """

    stage = "template-execution"


class FormattingError(GenerationError):
    """Raised when generated code cannot be formatted.

    Attributes:
        code: Best-effort text at the point of failure, kept for diagnosis
    """

    stage = "formatting"

    def __init__(self, message: str, code: str = ""):
        super().__init__(message)
        self.code = code


class StructuralParseError(GenerationError):
    """Raised when source cannot be parsed into declarations."""

    stage = "structural-parse"


class WriteError(GenerationError):
    """Raised when a generated file cannot be written."""

    stage = "write"

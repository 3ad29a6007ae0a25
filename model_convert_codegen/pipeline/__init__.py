"""
Pipeline - template based generation of the convert modules.

Each generated file goes through the same phases:

1. Render: execute the file's template against the entity model
2. Format: normalize imports and apply the formatter backend
3. Rewrite: demote generated functions overridden by user code
4. Write: validate and atomically replace the target file
"""

from __future__ import annotations

from .errors import (
    FormattingError,
    GenerationError,
    StructuralParseError,
    TemplateError,
    TemplateExecutionError,
    TemplateParseError,
    TemplateReadError,
    WriteError,
)
from .formatters import CodeFormatter
from .generator import FILES_TO_GENERATE, ConvertGenerator, ConvertTemplateData, FileResult, GenerationReport
from .renderer import TemplateRenderer
from .rewriter import OverrideRewriter
from .writer import AtomicWriter

__all__ = [
    "ConvertGenerator",
    "ConvertTemplateData",
    "FileResult",
    "GenerationReport",
    "FILES_TO_GENERATE",
    "TemplateRenderer",
    "CodeFormatter",
    "OverrideRewriter",
    "AtomicWriter",
    "GenerationError",
    "TemplateError",
    "TemplateReadError",
    "TemplateParseError",
    "TemplateExecutionError",
    "FormattingError",
    "StructuralParseError",
    "WriteError",
]

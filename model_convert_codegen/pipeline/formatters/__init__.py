"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter
from .black_formatter import BlackFormatter
from .code_formatter import CodeFormatter
from .imports import DEFAULT_KNOWN_IMPORTS, ImportNormalizer, ImportSpec
from .ruff_formatter import RuffFormatter

__all__ = [
    "Formatter",
    "BlackFormatter",
    "RuffFormatter",
    "CodeFormatter",
    "ImportNormalizer",
    "ImportSpec",
    "DEFAULT_KNOWN_IMPORTS",
]

"""
Override rewriter: demotes generated functions that user code replaces.
"""

from __future__ import annotations

from .declarations import Declaration, DeclarationKind, DeclarationModel
from .override_rewriter import DEFAULT_OVERRIDE_PREFIX, OverrideRewriter, is_function_overridden_by_user

__all__ = [
    "Declaration",
    "DeclarationKind",
    "DeclarationModel",
    "OverrideRewriter",
    "DEFAULT_OVERRIDE_PREFIX",
    "is_function_overridden_by_user",
]

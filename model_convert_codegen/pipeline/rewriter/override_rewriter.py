"""
Override-safe rewriting of generated modules.

When a user defines a function with the same name as one the generator
emits, the generated function is demoted to a reserved alternate name
(``original`` + name) so both definitions can coexist and the user code
can still call the generated default.

Call sites inside the generated module keep using the bare name. When the
module defining the user function is known, an import binding the bare
name to the user function is appended at the end of the generated module,
so those call sites reach the user version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ...config import DEFAULT_OVERRIDE_PREFIX
from .declarations import Declaration, DeclarationModel

logger = logging.getLogger(__name__)

OVERRIDE_BINDINGS_COMMENT = "# User defined overrides"


def is_function_overridden_by_user(function_name: str, user_defined_functions: Iterable[str]) -> bool:
    return function_name in user_defined_functions


class OverrideRewriter:
    """Renames top-level generated functions that users have overridden.

    Only the declaration name changes. Call sites, classes, variables,
    nested functions, strings and comments are left untouched.

    Args:
        user_defined_functions: Overridden function names, or a mapping from
            each name to the module (relative to the output package) defining it
        prefix: Prefix of the reserved name given to demoted functions
    """

    def __init__(
        self,
        user_defined_functions: Iterable[str] | Mapping[str, str],
        prefix: str = DEFAULT_OVERRIDE_PREFIX,
    ):
        if isinstance(user_defined_functions, Mapping):
            self.user_modules = dict(user_defined_functions)
        else:
            self.user_modules = {}
        self.user_defined_functions = frozenset(user_defined_functions)
        self.prefix = prefix

    def reserved_name(self, function_name: str) -> str:
        return self.prefix + function_name

    def overridden(self, model: DeclarationModel) -> list[Declaration]:
        """Function declarations of the model that collide with user functions."""
        return [d for d in model.functions() if is_function_overridden_by_user(d.name, self.user_defined_functions)]

    def bindings(self, function_names: Iterable[str]) -> list[str]:
        """Import lines binding demoted names to the user functions, one per module."""
        by_module: dict[str, set[str]] = {}
        for name in function_names:
            module = self.user_modules.get(name)
            if module is None:
                continue
            if not module.isidentifier():
                logger.warning("cannot import user override %s from module %r", name, module)
                continue
            by_module.setdefault(module, set()).add(name)
        return [
            f"from .{module} import {', '.join(sorted(names))}  # noqa: E402"
            for module, names in sorted(by_module.items())
        ]

    def rewrite(self, source: str) -> str:
        """Demote overridden functions in source.

        Args:
            source: Formatted source of one generated module

        Returns:
            Source with overridden function declarations renamed, followed by
            the imports of the user functions replacing them

        Raises:
            StructuralParseError: If the source cannot be parsed into declarations
        """
        model = DeclarationModel.parse(source)
        renames = {d: self.reserved_name(d.name) for d in self.overridden(model)}
        for declaration, new_name in renames.items():
            logger.debug("renaming user overridden function %s to %s", declaration.name, new_name)
        rewritten = model.to_source(renames)

        bindings = self.bindings(d.name for d in renames)
        if not bindings:
            return rewritten
        return rewritten.rstrip("\n") + "\n\n\n" + OVERRIDE_BINDINGS_COMMENT + "\n" + "\n".join(bindings) + "\n"

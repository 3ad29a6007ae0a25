"""
Import normalization for generated Python code.

Rewrites the leading import block of a module so it contains exactly the
imports the module uses: unused bindings are dropped, missing ones are
added from a table of known imports, and the result is grouped and sorted.
"""

from __future__ import annotations

import ast
import builtins
import collections
import re
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..errors import FormattingError

# Splits text into lines the way the Python tokenizer counts them
_LINE_PATTERN = re.compile(r".*?(?:\r\n|\r|\n)|.+\Z", re.S)

_BUILTIN_NAMES = frozenset(dir(builtins))

FUTURE_SECTION, STDLIB_SECTION, THIRD_PARTY_SECTION, LOCAL_SECTION = range(4)


@dataclass(frozen=True)
class ImportSpec:
    """A single imported binding.

    ``ImportSpec("typing", "Any")`` is ``from typing import Any`` while
    ``ImportSpec("app.models", alias="models")`` is ``import app.models as models``.
    """

    module: str
    name: str | None = None
    alias: str | None = None
    level: int = 0

    @property
    def binding(self) -> str:
        """Name the import binds in the module namespace."""
        if self.alias:
            return self.alias
        if self.name:
            return self.name
        return self.module.split(".")[0]

    @property
    def is_from_import(self) -> bool:
        return self.name is not None

    def render_alias(self) -> str:
        target = self.name if self.is_from_import else self.module
        return f"{target} as {self.alias}" if self.alias else target


DEFAULT_KNOWN_IMPORTS: Mapping[str, ImportSpec] = {
    spec.binding: spec
    for spec in (
        ImportSpec("typing", "Any"),
        ImportSpec("typing", "Optional"),
        ImportSpec("collections.abc", "Iterable"),
        ImportSpec("collections.abc", "Mapping"),
        ImportSpec("collections.abc", "Sequence"),
        ImportSpec("datetime", "datetime"),
        ImportSpec("decimal", "Decimal"),
    )
}


class ImportNormalizer:
    """Computes the minimal, ordered import block of a module.

    Only the imports at the top of the module (after an optional docstring)
    are rewritten; imports further down are treated as regular statements.
    """

    def __init__(
        self,
        known_imports: Mapping[str, ImportSpec] | None = None,
        local_packages: Iterable[str] = (),
    ):
        self.known_imports = dict(DEFAULT_KNOWN_IMPORTS if known_imports is None else known_imports)
        self.local_packages = frozenset(p.split(".")[0] for p in local_packages if p)

    def normalize(self, code: str) -> str:
        """Return code with its leading import block normalized.

        Raises:
            FormattingError: If the code is not valid Python
        """
        try:
            tree = ast.parse(code)
        except SyntaxError as e:
            raise FormattingError(f"formatting: {e}", code=code) from e

        body = tree.body
        idx = 1 if body and _is_docstring(body[0]) else 0
        block = []
        while idx < len(body) and isinstance(body[idx], (ast.Import, ast.ImportFrom)):
            block.append(body[idx])
            idx += 1
        following = body[idx] if idx < len(body) else None

        if block and following is not None and _start_line(following) <= block[-1].end_lineno:
            # Statement sharing a line with an import, leave the module alone
            return code

        used, bound = _collect_names(tree, block)
        specs = [spec for node in block for spec in _specs_from_node(node)]
        kept = [s for s in specs if s.module == "__future__" or s.name == "*" or s.binding in used]
        kept_bindings = {s.binding for s in kept}
        missing = sorted(used - bound - kept_bindings - _BUILTIN_NAMES)
        added = [self.known_imports[name] for name in missing if name in self.known_imports]

        if not block and not added:
            return code

        lines = _LINE_PATTERN.findall(code)
        if block:
            header = "".join(lines[: _start_line(block[0]) - 1])
            rest = "".join(lines[block[-1].end_lineno :])
        elif following is not None:
            header = "".join(lines[: _start_line(following) - 1])
            rest = "".join(lines[_start_line(following) - 1 :])
        else:
            header = code
            rest = ""

        parts = []
        if header.strip():
            parts.append(header.rstrip("\r\n"))
        import_block = self.render(kept + added)
        if import_block:
            parts.append(import_block)
        if rest.strip():
            parts.append(rest.strip("\r\n"))
        return "\n\n".join(parts) + "\n"

    def render(self, specs: Iterable[ImportSpec]) -> str:
        """Render import specs as grouped, sorted import statements."""
        sections: dict[int, list[ImportSpec]] = collections.defaultdict(list)
        for spec in set(specs):
            sections[self._section(spec)].append(spec)

        rendered = []
        for section in sorted(sections):
            rendered.append("\n".join(_render_section(sections[section])))
        return "\n\n".join(rendered)

    def _section(self, spec: ImportSpec) -> int:
        top = spec.module.split(".")[0]
        if spec.module == "__future__":
            return FUTURE_SECTION
        if spec.level > 0 or top in self.local_packages:
            return LOCAL_SECTION
        if top in sys.stdlib_module_names:
            return STDLIB_SECTION
        return THIRD_PARTY_SECTION


def _render_section(specs: list[ImportSpec]) -> list[str]:
    """Plain imports first, then from-imports merged per module."""
    lines = []
    plain = sorted((s for s in specs if not s.is_from_import), key=lambda s: (s.module.lower(), s.module, s.alias or ""))
    for spec in plain:
        lines.append(f"import {spec.render_alias()}")

    from_groups: dict[tuple[int, str], list[ImportSpec]] = collections.defaultdict(list)
    for spec in specs:
        if spec.is_from_import:
            from_groups[(spec.level, spec.module)].append(spec)

    for level, module in sorted(from_groups, key=lambda k: (k[0], k[1].lower(), k[1])):
        group = from_groups[(level, module)]
        source = "." * level + module
        if any(s.name == "*" for s in group):
            lines.append(f"from {source} import *")
        names = sorted((s for s in group if s.name != "*"), key=lambda s: (s.name.lower(), s.name, s.alias or ""))
        if names:
            lines.append(f"from {source} import {', '.join(s.render_alias() for s in names)}")
    return lines


def _specs_from_node(node: ast.Import | ast.ImportFrom) -> list[ImportSpec]:
    if isinstance(node, ast.Import):
        return [ImportSpec(module=a.name, alias=a.asname) for a in node.names]
    return [ImportSpec(module=node.module or "", name=a.name, alias=a.asname, level=node.level) for a in node.names]


def _collect_names(tree: ast.Module, block: list[ast.stmt]) -> tuple[set[str], set[str]]:
    """Names read anywhere in the module and names bound outside the import block."""
    used: set[str] = set()
    bound: set[str] = set()
    block_ids = {id(node) for node in block}

    for node in ast.walk(tree):
        if isinstance(node, ast.Name):
            if isinstance(node.ctx, ast.Store):
                bound.add(node.id)
            else:
                used.add(node.id)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            bound.add(node.name)
        elif isinstance(node, ast.arg):
            bound.add(node.arg)
        elif isinstance(node, ast.ExceptHandler) and node.name:
            bound.add(node.name)
        elif isinstance(node, (ast.MatchAs, ast.MatchStar)) and node.name:
            bound.add(node.name)
        elif isinstance(node, ast.MatchMapping) and node.rest:
            bound.add(node.rest)
        elif isinstance(node, (ast.Import, ast.ImportFrom)) and id(node) not in block_ids:
            bound.update(spec.binding for spec in _specs_from_node(node))

    used.update(_dunder_all(tree))
    return used, bound


def _dunder_all(tree: ast.Module) -> set[str]:
    """Names exported through a literal ``__all__``."""
    names = set()
    for node in tree.body:
        if isinstance(node, ast.Assign) and any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets):
            if isinstance(node.value, (ast.List, ast.Tuple)):
                names.update(e.value for e in node.value.elts if isinstance(e, ast.Constant) and isinstance(e.value, str))
    return names


def _is_docstring(node: ast.stmt) -> bool:
    return isinstance(node, ast.Expr) and isinstance(node.value, ast.Constant) and isinstance(node.value.value, str)


def _start_line(node: ast.stmt) -> int:
    decorators = getattr(node, "decorator_list", [])
    return min([node.lineno] + [d.lineno for d in decorators])

"""
Declaration-level model of a Python module.

Parses source into its ordered top-level declarations, each carrying
offsets into the original text so individual names can be replaced
without touching anything else in the file.
"""

from __future__ import annotations

import ast
import io
import tokenize
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..errors import StructuralParseError


class DeclarationKind(str, Enum):
    FUNCTION = "function"
    TYPE = "type"
    VARIABLE = "variable"
    OTHER = "other"


@dataclass(frozen=True)
class Declaration:
    """A top-level statement of a module.

    Attributes:
        kind: What the statement declares
        name: Declared name, None for statements that declare nothing
        start: Offset of the first character (decorators included)
        end: Offset just past the last character
        name_start: Offset of the name token for functions and classes
        name_end: Offset just past the name token
    """

    kind: DeclarationKind
    name: str | None
    start: int
    end: int
    name_start: int | None = None
    name_end: int | None = None

    @property
    def is_function(self) -> bool:
        return self.kind == DeclarationKind.FUNCTION


@dataclass(frozen=True)
class DeclarationModel:
    """Source text together with its top-level declarations, in order."""

    source: str
    declarations: tuple[Declaration, ...]

    @classmethod
    def parse(cls, source: str) -> DeclarationModel:
        """Parse source code into a declaration model.

        Raises:
            StructuralParseError: If the source is not valid Python
        """
        try:
            tree = ast.parse(source)
        except SyntaxError as e:
            raise StructuralParseError(f"could not parse source: {e}") from e

        lines = io.StringIO(source, newline="").readlines()
        offsets = [0]
        for line in lines:
            offsets.append(offsets[-1] + len(line))

        def offset(lineno: int, byte_col: int) -> int:
            if lineno > len(lines):
                return len(source)
            line = lines[lineno - 1]
            col = len(line.encode("utf-8")[:byte_col].decode("utf-8", errors="ignore"))
            return offsets[lineno - 1] + col

        name_spans = _definition_name_spans(source, offsets)

        declarations = []
        for node in tree.body:
            start_line = min([node.lineno] + [d.lineno for d in getattr(node, "decorator_list", [])])
            start = offset(start_line, 0) if start_line != node.lineno else offset(node.lineno, node.col_offset)
            end = offset(node.end_lineno, node.end_col_offset)
            kind, name = _classify(node)
            name_start = name_end = None
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
                name_start, name_end = name_spans[offset(node.lineno, node.col_offset)]
            declarations.append(Declaration(kind, name, start, end, name_start, name_end))
        return cls(source, tuple(declarations))

    def functions(self) -> list[Declaration]:
        return [d for d in self.declarations if d.is_function]

    def to_source(self, renames: Mapping[Declaration, str] | None = None) -> str:
        """Serialize back to source, replacing the names of the given declarations.

        Only the name tokens change; every other character is kept as-is.
        """
        source = self.source
        for declaration, new_name in sorted((renames or {}).items(), key=lambda item: item[0].name_start, reverse=True):
            if declaration.name_start is None:
                raise ValueError(f"declaration {declaration.name!r} has no renameable name")
            source = source[: declaration.name_start] + new_name + source[declaration.name_end :]
        return source


def _classify(node: ast.stmt) -> tuple[DeclarationKind, str | None]:
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        return DeclarationKind.FUNCTION, node.name
    if isinstance(node, ast.ClassDef):
        return DeclarationKind.TYPE, node.name
    type_alias = getattr(ast, "TypeAlias", None)
    if type_alias is not None and isinstance(node, type_alias):
        return DeclarationKind.TYPE, node.name.id
    if isinstance(node, ast.Assign):
        names = [t.id for t in node.targets if isinstance(t, ast.Name)]
        return DeclarationKind.VARIABLE, names[0] if names else None
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return DeclarationKind.VARIABLE, node.target.id if isinstance(node.target, ast.Name) else None
    return DeclarationKind.OTHER, None


def _definition_name_spans(source: str, offsets: list[int]) -> dict[int, tuple[int, int]]:
    """Map the offset of each ``def``/``async``/``class`` keyword to the span of the name after it."""
    spans: dict[int, tuple[int, int]] = {}
    readline = io.StringIO(source, newline="").readline
    previous = None
    keyword = None
    try:
        for token in tokenize.generate_tokens(readline):
            if token.type != tokenize.NAME:
                if token.type not in (tokenize.NL, tokenize.COMMENT):
                    previous = keyword = None
                continue
            position = offsets[token.start[0] - 1] + token.start[1]
            if keyword is not None:
                end = offsets[token.end[0] - 1] + token.end[1]
                spans[keyword] = (position, end)
                if previous is not None:
                    spans[previous] = (position, end)
                previous = keyword = None
            elif token.string in ("def", "class"):
                keyword = position
            elif token.string == "async":
                previous = position
            else:
                previous = None
    except (tokenize.TokenError, SyntaxError) as e:
        raise StructuralParseError(f"could not tokenize source: {e}") from e
    return spans

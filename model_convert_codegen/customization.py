"""
Discovery of user-defined functions in the output package.

Users customize generated behavior by defining, in their own modules next
to the generated ones, a function with the same name as a generated one.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def get_function_names_from_file(path: Path) -> set[str]:
    """Top-level function names declared in a Python file.

    Raises:
        SyntaxError: If the file is not valid Python
        OSError: If the file cannot be read
    """
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    return {node.name for node in tree.body if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))}


def get_user_defined_functions(directory: Path | str, ignore_files: Iterable[str] = ()) -> dict[str, str]:
    """Functions declared in the Python files of a directory, with the module defining each.

    Files listed in ignore_files (the generator's own output) are skipped, as
    are files that cannot be read or parsed; the latter are logged. A name
    defined in several files is attributed to the first file in name order.

    Args:
        directory: Output package directory
        ignore_files: File names owned by the generator

    Returns:
        Mapping of top-level function names to the name of their module
    """
    directory = Path(directory)
    if not directory.is_dir():
        return {}

    ignored = set(ignore_files)
    functions: dict[str, str] = {}
    for path in sorted(directory.glob("*.py")):
        if path.name in ignored:
            continue
        try:
            names = get_function_names_from_file(path)
        except (SyntaxError, OSError, UnicodeDecodeError) as e:
            logger.error("could not parse user defined functions in %s: %s", path, e)
            continue
        for name in sorted(names):
            module = functions.setdefault(name, path.stem)
            if module != path.stem:
                logger.warning("%s is defined in both %s and %s, using %s", name, module, path.stem, module)
    return functions


def get_function_names_from_dir(directory: Path | str, ignore_files: Iterable[str] = ()) -> frozenset[str]:
    """Names of the top-level functions declared in the Python files of a directory."""
    return frozenset(get_user_defined_functions(directory, ignore_files))

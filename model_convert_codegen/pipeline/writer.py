"""
Atomic file writer for generated modules.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written generated file behind.
"""

from __future__ import annotations

import ast
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import WriteError


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(
        self,
        validate_python: Callable[[str], None] | None = None,
        atomic: bool = True,
    ):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
            atomic: Whether to go through a temporary file, plain write otherwise
        """
        self._validate_python = validate_python or self._default_validate_python
        self._atomic = atomic

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file, replacing any previous version.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            WriteError: If validation or any file operation fails
        """
        if validate:
            self._validate_python(content)

        try:
            if not self._atomic:
                path.write_text(content, encoding="utf-8")
                return
            self._write_atomic(path, content)
        except OSError as e:
            raise WriteError(f"could not write {path}: {e}") from e

    def _write_atomic(self, path: Path, content: str) -> None:
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _default_validate_python(self, content: str) -> None:
        """Default Python validation.

        Raises:
            WriteError: If the content is not valid Python
        """
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise WriteError(f"Generated Python code is not valid: {e}") from e

"""
Ruff formatter for Python code.
"""

from __future__ import annotations

import subprocess

from ...config import FormatterConfig
from ..errors import FormattingError
from .base import Formatter


class RuffFormatter(Formatter):
    """Formatter using the ruff executable for Python code."""

    name = "ruff"

    def __init__(self):
        self._available = None

    def is_available(self) -> bool:
        """Check if ruff is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    ["ruff", "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using ruff.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormattingError: If ruff is missing or rejects the code
        """
        if not self.is_available():
            raise FormattingError("formatting: ruff is not installed", code=code)

        cmd = ["ruff", "format", "--stdin-filename", "code.py"]

        if config.line_length:
            cmd.extend(["--line-length", str(config.line_length)])

        if config.target_version:
            cmd.extend(["--target-version", config.target_version])

        if not config.string_normalization:
            cmd.extend(["--config", "format.quote-style='preserve'"])

        if not config.magic_trailing_comma:
            cmd.extend(["--config", "format.skip-magic-trailing-comma=true"])

        cmd.append("-")

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            raise FormattingError(f"formatting: {e}", code=code) from e

        if result.returncode != 0:
            raise FormattingError(f"formatting: {result.stderr.strip()}", code=code)
        return result.stdout

"""
Black formatter for Python code.
"""

from __future__ import annotations

import black

from ...config import FormatterConfig
from ..errors import FormattingError
from .base import Formatter


class BlackFormatter(Formatter):
    """Formatter using black for Python code."""

    name = "black"

    def is_available(self) -> bool:
        return True

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using black.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormattingError: If black rejects the code
        """
        mode = black.Mode(
            target_versions=_target_versions(config.target_version),
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )

        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormattingError(f"formatting: {e}", code=code) from e


def _target_versions(target_version: str) -> set:
    if not target_version:
        return set()
    version = getattr(black.TargetVersion, target_version.upper(), None)
    if version is None:
        # Newest version black knows about
        version = max(black.TargetVersion, key=lambda v: v.value)
    return {version}

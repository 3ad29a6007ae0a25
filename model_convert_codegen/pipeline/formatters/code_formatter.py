"""
Formatting of rendered code: import normalization followed by a formatter backend.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ...config import FormatterConfig
from .base import Formatter
from .black_formatter import BlackFormatter
from .imports import ImportNormalizer, ImportSpec
from .ruff_formatter import RuffFormatter

logger = logging.getLogger(__name__)

FORMATTERS: dict[str, type[Formatter]] = {
    "black": BlackFormatter,
    "ruff": RuffFormatter,
}


class CodeFormatter:
    """Normalizes imports, then applies the configured formatter backend.

    Formatting its own output again yields no further changes.
    """

    def __init__(
        self,
        config: FormatterConfig,
        known_imports: Mapping[str, ImportSpec] | None = None,
        local_packages: Iterable[str] = (),
    ):
        self.config = config
        self.normalizer = ImportNormalizer(known_imports, local_packages)
        self.backend = self._select_backend(config.backend)

    @staticmethod
    def _select_backend(name: str) -> Formatter:
        if name not in FORMATTERS:
            raise ValueError(f"Unknown formatter backend {name!r}, expected one of {sorted(FORMATTERS)}")
        backend = FORMATTERS[name]()
        if not backend.is_available():
            logger.warning("formatter %s is not available, falling back to black", name)
            backend = BlackFormatter()
        return backend

    def format(self, code: str) -> str:
        """
        Format generated code.

        Args:
            code: Rendered source code

        Returns:
            Code with a minimal sorted import block and canonical layout

        Raises:
            FormattingError: If the code cannot be parsed or formatted;
                the error carries the best-effort text
        """
        normalized = self.normalizer.normalize(code)
        if not self.config.enabled:
            return normalized
        return self.backend.format(normalized, self.config)

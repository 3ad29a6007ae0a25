"""
Naming functions available to templates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType

from .naming import NamingEngine, lc_first, uc_first


@dataclass(frozen=True)
class TemplateFunctions:
    """The fixed set of callables templates may use, one field per template name.

    Built once per run and injected into the renderer; templates have no
    other way to invoke naming logic.
    """

    identifier: Callable[[str], str]
    id: Callable[[str], str]
    lc_first: Callable[[str], str]
    uc_first: Callable[[str], str]
    camel: Callable[[str], str]
    lower_identifier: Callable[[str], str]
    plural: Callable[[str], str]
    singular: Callable[[str], str]
    snake: Callable[[str], str]

    @staticmethod
    def from_engine(engine: NamingEngine) -> TemplateFunctions:
        return TemplateFunctions(
            identifier=engine.to_pascal,
            id=engine.to_identifier_id,
            lc_first=lc_first,
            uc_first=uc_first,
            camel=engine.to_camel_lower,
            lower_identifier=engine.to_lower_identifier,
            plural=engine.pluralize,
            singular=engine.singularize,
            snake=engine.to_snake,
        )

    def registry(self) -> Mapping[str, Callable[[str], str]]:
        """Read-only mapping of template name to callable."""
        return MappingProxyType({f.name: getattr(self, f.name) for f in fields(self)})

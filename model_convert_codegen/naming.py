"""
Naming and inflection utilities for generated identifiers.

Converts identifiers between casing conventions (snake, kebab, camel,
Pascal) and between grammatical singular and plural forms.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Mapping
from types import MappingProxyType

import inflection

# Acronyms that must always be emitted in a fixed form, keyed by upper-case form
DEFAULT_ACRONYMS: Mapping[str, str] = MappingProxyType(
    {
        "QR": "Qr",
        "KVK": "Kvk",
        "URL": "Url",
    }
)

# Separators between words of an identifier
_SEPARATOR_PATTERN = re.compile(r"[\s_\-.]+")

# Regex pattern to split a chunk into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[A-Z]{2,}s(?![a-z])|[A-Z]+(?=[A-Z][a-z])|[A-Z]*[a-z]+|[A-Z]+|[0-9]+|[^A-Za-z0-9]+")


def _split_into_words(text: str) -> list[str]:
    """Split text into words on separators and camelCase boundaries."""
    words = []
    for chunk in _SEPARATOR_PATTERN.split(text.strip()):
        if chunk:
            words.extend(_WORD_PATTERN.findall(chunk))
    return words


def lc_first(text: str) -> str:
    """Lower-case the first character of text."""
    if not text:
        return text
    return text[0].lower() + text[1:]


def uc_first(text: str) -> str:
    """Upper-case the first character of text."""
    if not text:
        return text
    return text[0].upper() + text[1:]


class NamingEngine:
    """Casing and inflection rules with a fixed acronym table.

    The acronym table maps the upper-case spelling of an abbreviation to the
    exact form it must take in generated identifiers, for example
    ``{"URL": "Url"}`` turns ``base_url`` and ``baseURL`` into ``BaseUrl``.
    """

    def __init__(self, acronyms: Mapping[str, str] | None = None):
        table = DEFAULT_ACRONYMS if acronyms is None else acronyms
        self.acronyms: Mapping[str, str] = MappingProxyType({k.upper(): v for k, v in table.items()})

    def to_pascal(self, identifier: str) -> str:
        """Convert snake_case, kebab-case or camelCase text to PascalCase.

        Examples:
            "first_name" -> "FirstName"
            "actionTemplate" -> "ActionTemplate"
            "address2line" -> "Address2Line"
            "qr_code" -> "QrCode"
            "user_ID" -> "UserID"
        """
        parts = []
        for word in _split_into_words(identifier):
            acronym = self.acronyms.get(word.upper())
            if acronym is not None:
                parts.append(acronym)
            else:
                parts.append(uc_first(word))
        return "".join(parts)

    def to_identifier_id(self, identifier: str) -> str:
        """PascalCase with a trailing ``ID``/``IDS`` spelled ``Id``/``Ids``."""
        name = self.to_pascal(identifier)
        if name.endswith("IDS"):
            return name[: -len("IDS")] + "Ids"
        if name.endswith("ID"):
            return name[: -len("ID")] + "Id"
        return name

    def to_camel_lower(self, identifier: str) -> str:
        """PascalCase without a trailing ``At``, first character lower-cased.

        Examples:
            "created_at" -> "created"
            "user_name" -> "userName"
            "attachment" -> "attachment"
        """
        name = self.to_pascal(identifier)
        if name.endswith("At"):
            name = name[: -len("At")]
        return lc_first(name)

    def to_lower_identifier(self, identifier: str) -> str:
        return self.to_pascal(identifier.lower())

    def to_snake(self, identifier: str) -> str:
        """Convert an identifier to snake_case ("UserID" -> "user_id").

        Python keywords get a trailing underscore ("in" -> "in_").
        """
        name = "_".join(word.lower() for word in _split_into_words(identifier) if word.isalnum())
        if keyword.iskeyword(name):
            return name + "_"
        return name

    def pluralize(self, identifier: str) -> str:
        """Pluralize the last word of an identifier ("UserProfile" -> "UserProfiles")."""
        return self._inflect(identifier, inflection.pluralize)

    def singularize(self, identifier: str) -> str:
        """Singularize the last word of an identifier ("People" -> "Person")."""
        return self._inflect(identifier, inflection.singularize)

    def _inflect(self, identifier: str, inflect) -> str:
        if not identifier:
            return identifier
        name = self.to_pascal(inflect(inflection.underscore(identifier)))
        return lc_first(name) if identifier[0].islower() else name


_default_engine = NamingEngine()


def to_pascal(identifier: str) -> str:
    return _default_engine.to_pascal(identifier)


def to_identifier_id(identifier: str) -> str:
    return _default_engine.to_identifier_id(identifier)


def to_camel_lower(identifier: str) -> str:
    return _default_engine.to_camel_lower(identifier)


def to_lower_identifier(identifier: str) -> str:
    return _default_engine.to_lower_identifier(identifier)


def to_snake(identifier: str) -> str:
    return _default_engine.to_snake(identifier)


def pluralize(identifier: str) -> str:
    return _default_engine.pluralize(identifier)


def singularize(identifier: str) -> str:
    return _default_engine.singularize(identifier)

"""Resource naming: record type name -> API path segment."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def demodulize(type_name: str) -> str:
    """Drop any module or package qualifier: "crm.Contact" -> "Contact"."""
    return re.split(r"\.|::", type_name)[-1]


def underscore(name: str) -> str:
    """CamelCase -> snake_case: "ContactNote" -> "contact_note"."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def pluralize(word: str) -> str:
    if not word:
        return word
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def resource_name(type_name: str) -> str:
    """API resource segment for a record type.

    Example:
        resource_name("Contact") => "contacts"
        resource_name("Company") => "companies"
    """
    return pluralize(underscore(demodulize(type_name)))

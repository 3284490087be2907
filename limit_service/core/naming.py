"""
Limit name canonicalisation.

Limits are registered and looked up by their camelCase name, so
"custom_themes", "custom-themes" and "customThemes" all refer to one limit.
"""

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(name: str) -> list[str]:
    """Split a name in any case style into lowercase words."""
    spaced = _ACRONYM_BOUNDARY.sub(r"\1 \2", name)
    spaced = _CASE_BOUNDARY.sub(r"\1 \2", spaced)
    return [word.lower() for word in _SEPARATORS.split(spaced) if word]


def to_camel_case(name: str) -> str:
    """
    Convert a limit name to camelCase.

    Args:
        name: Name in snake_case, kebab-case, camelCase, PascalCase or spaced form

    Returns:
        camelCase name, e.g. "customThemes"
    """
    words = split_words(name)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def humanize(name: str) -> str:
    """Lowercase, space-separated form of a name ("customThemes" -> "custom themes")."""
    return " ".join(split_words(name))

"""
String case conversion utilities for Go client generation.

This module provides the identifier casing and sanitisation helpers the
generator relies on when turning OpenAPI names (operation ids, response
names, property names) into Go identifiers.
"""

import re
from collections.abc import Callable
from typing import Final

# Regex patterns for case conversion
_WORD_SEPARATOR_PATTERN: Final = re.compile(r"[^a-zA-Z0-9]+")
_NON_IDENTIFIER_PATTERN: Final = re.compile(r"[^a-zA-Z0-9_]")

# Reserved Go keywords and predeclared identifiers that cannot be used as names
GO_KEYWORDS: Final = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
        # Predeclared identifiers that would shadow builtins
        "any",
        "error",
        "nil",
        "true",
        "false",
        "string",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def uppercase_first_character(string: str | None) -> str:
    """Uppercase the first character of a string, leaving the rest untouched.

    Examples:
        >>> uppercase_first_character("getTestByName")
        'GetTestByName'
    """
    return _convert_if_not_empty(string, lambda s: s[0].upper() + s[1:])


def lowercase_first_character(string: str | None) -> str:
    """Lowercase the first character of a string, leaving the rest untouched.

    Examples:
        >>> lowercase_first_character("GetTestByName")
        'getTestByName'
    """
    return _convert_if_not_empty(string, lambda s: s[0].lower() + s[1:])


def to_camel_case(string: str | None) -> str:
    """Convert a name into an exported Go identifier.

    Separator characters are dropped and the first character of every word
    is uppercased. The remaining characters keep their case so status
    classes such as ``4XX`` survive unchanged.

    Args:
        string: String to convert.

    Returns:
        Camel case string with an uppercase first character.

    Examples:
        >>> to_camel_case("default")
        'Default'
        >>> to_camel_case("4XX")
        '4XX'
        >>> to_camel_case("get-test_by name")
        'GetTestByName'
    """

    def _camelcase(s: str) -> str:
        return "".join(uppercase_first_character(word) for word in _WORD_SEPARATOR_PATTERN.split(s) if word)

    return _convert_if_not_empty(string, _camelcase)


def is_go_keyword(name: str) -> bool:
    """Check if a name is a reserved Go keyword or predeclared identifier."""
    return name in GO_KEYWORDS


def sanitize_go_identity(name: str | None) -> str:
    """Normalize name to be a valid Go identifier.

    This function ensures the resulting string is a valid Go identifier:
    - Replaces invalid characters with underscores
    - Ensures it doesn't start with a digit
    - Prefixes reserved words with an underscore

    Args:
        name: The string to normalize.

    Returns:
        A valid Go identifier.

    Examples:
        >>> sanitize_go_identity("123invalid")
        '_123invalid'
        >>> sanitize_go_identity("type")
        '_type'
    """

    def _sanitize(s: str) -> str:
        sanitized = _NON_IDENTIFIER_PATTERN.sub("_", s)

        if sanitized[0].isdigit() or is_go_keyword(sanitized):
            sanitized = f"_{sanitized}"

        return sanitized

    return _convert_if_not_empty(name, _sanitize)


def go_field_name(json_field_name: str) -> str:
    """Derive the exported Go struct field name for a JSON property name."""
    name = to_camel_case(json_field_name)
    if not name or name[0].isdigit():
        name = f"N{name}"
    return name

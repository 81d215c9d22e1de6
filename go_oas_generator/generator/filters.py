"""
Jinja2 filters for Go code generation.

This module provides the small text helpers the Go templates call while
rendering response types and decoding functions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from go_oas_generator.utils.string_case import uppercase_first_character

RESPONSE_TYPE_SUFFIX: Final = "Response"

_DOC_PREFIX = "// "


def go_doc_comment(text: str | None, indent: int = 0) -> str:
    """Convert text to Go line comments.

    Args:
        text: The text to convert to comments.
        indent: Number of tabs for base indentation.

    Returns:
        Formatted Go comment block.

    Example:
        >>> go_doc_comment("Returns a test")
        '// Returns a test'
    """
    if not text:
        return ""

    indent_str = "\t" * indent
    lines = text.strip().split("\n")
    return "\n".join(f"{indent_str}{_DOC_PREFIX}{line.strip()}".rstrip() for line in lines)


def sanitize_go_string_literal(text: str) -> str:
    """Sanitize text for use in Go interpreted string literals.

    Args:
        text: Text to sanitize.

    Returns:
        Sanitized text safe for Go string literals.
    """
    if not text:
        return ""

    escape_map = {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\t": "\\t",
    }

    result = text
    for char, escaped in escape_map.items():
        result = result.replace(char, escaped)

    return result


def to_string_array(values: Sequence[str]) -> str:
    """Render a Go ``[]string`` literal.

    Examples:
        >>> to_string_array(["ok", "page"])
        '[]string{"ok","page"}'
    """
    return '[]string{"' + '","'.join(sanitize_go_string_literal(value) for value in values) + '"}'


def strip_new_lines(text: str) -> str:
    """Remove every newline from ``text``."""
    return text.replace("\n", "")


def gen_response_type_name(operation_id: str) -> str:
    """Create the name of the generated response envelope for an operation.

    Examples:
        >>> gen_response_type_name("getTestByName")
        'GetTestByNameResponse'
    """
    return f"{uppercase_first_character(operation_id)}{RESPONSE_TYPE_SUFFIX}"


def gen_response_payload(operation_id: str) -> str:
    """Generate the envelope literal each response parse function starts from."""
    return f"&{gen_response_type_name(operation_id)}{{\nBody: bodyBytes,\nHTTPResponse: rsp,\n}}"


# Register filters that will be available in Jinja templates
FILTERS = {
    "go_doc_comment": go_doc_comment,
    "sanitize_go_string_literal": sanitize_go_string_literal,
    "to_string_array": to_string_array,
    "strip_new_lines": strip_new_lines,
}

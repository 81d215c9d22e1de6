"""Tests for Go identifier casing helpers."""

import pytest

from go_oas_generator.utils.string_case import (
    go_field_name,
    lowercase_first_character,
    sanitize_go_identity,
    to_camel_case,
    uppercase_first_character,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("default", "Default"),
        ("200", "200"),
        ("4XX", "4XX"),
        ("getTestByName", "GetTestByName"),
        ("get-test_by name", "GetTestByName"),
        ("alive_since", "AliveSince"),
        ("", ""),
        (None, ""),
    ],
)
def test_to_camel_case(name: str | None, expected: str) -> None:
    assert to_camel_case(name) == expected


def test_first_character_helpers() -> None:
    assert uppercase_first_character("getCat") == "GetCat"
    assert lowercase_first_character("GetCat") == "getCat"
    assert uppercase_first_character("") == ""


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("valid_name", "valid_name"),
        ("valid@name", "valid_name"),
        ("123invalid", "_123invalid"),
        ("type", "_type"),
        ("map", "_map"),
    ],
)
def test_sanitize_go_identity(name: str, expected: str) -> None:
    assert sanitize_go_identity(name) == expected


def test_go_field_name_never_starts_with_digit() -> None:
    assert go_field_name("ok") == "Ok"
    assert go_field_name("3d-model") == "N3dModel"

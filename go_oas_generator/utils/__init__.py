"""
Utilities Module for Go Client Generation

This module provides utility functions for file operations, identifier casing,
and other common tasks in the Go client generation process.
"""

from .file_utils import clean_output_directory, list_go_files, write_files_to_disk
from .string_case import (
    go_field_name,
    is_go_keyword,
    lowercase_first_character,
    sanitize_go_identity,
    to_camel_case,
    uppercase_first_character,
)

__all__ = [
    "clean_output_directory",
    "go_field_name",
    "is_go_keyword",
    "list_go_files",
    "lowercase_first_character",
    "sanitize_go_identity",
    "to_camel_case",
    "uppercase_first_character",
    "write_files_to_disk",
]

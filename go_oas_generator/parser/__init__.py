"""
OpenAPI Parser Module for Go Client Generation

This module provides parsing capabilities for OpenAPI specifications
to extract information needed for Go response decoding generation.
"""

from .go_schema import (
    OPEN_TYPE,
    GoSchemaGenerator,
    Property,
    ResponseTypeDefinition,
    Schema,
    TypeDefinition,
)
from .oas_parser import (
    OASParser,
    Operation,
    ParsedSpec,
    ResponseSpec,
    build_response_type_definitions,
)

__all__ = [
    "OPEN_TYPE",
    "GoSchemaGenerator",
    "OASParser",
    "Operation",
    "ParsedSpec",
    "Property",
    "ResponseSpec",
    "ResponseTypeDefinition",
    "Schema",
    "TypeDefinition",
    "build_response_type_definitions",
]

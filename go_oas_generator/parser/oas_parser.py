"""
OpenAPI Specification Parser for Go Client Generation.

This module parses OpenAPI 3.x specifications and extracts the operation
model the response decoder works from: declared responses keyed by
response name, their content entries, the operation's vendor extensions,
and the Go type definitions derived for every decodable response body.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from go_oas_generator.content_types import classify_content_type
from go_oas_generator.parser.go_schema import GoSchemaGenerator, ResponseTypeDefinition
from go_oas_generator.utils.string_case import to_camel_case

logger = logging.getLogger(__name__)

# HTTP methods supported by OpenAPI
_HTTP_METHODS: Final = frozenset({"get", "post", "put", "delete", "patch", "head", "options", "trace"})

_YAML_SUFFIXES: Final = frozenset({".yaml", ".yml"})


@dataclass(frozen=True)
class ResponseSpec:
    """Represents one declared OpenAPI response."""

    response_name: str
    description: str = ""
    content: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    def sorted_content_types(self) -> list[str]:
        return sorted(self.content)


@dataclass
class Operation:
    """Represents an OpenAPI operation."""

    operation_id: str
    method: str
    path: str
    summary: str | None
    description: str | None
    responses: dict[str, ResponseSpec]
    extensions: dict[str, Any] = field(default_factory=dict)
    response_type_definitions: list[ResponseTypeDefinition] = field(default_factory=list)
    schema_generator: GoSchemaGenerator = field(default_factory=GoSchemaGenerator, repr=False, compare=False)

    def sorted_response_names(self) -> list[str]:
        return sorted(self.responses)


@dataclass
class ParsedSpec:
    """Represents a parsed OpenAPI specification."""

    info: dict[str, Any]
    operations: list[Operation]
    schemas: dict[str, Any]
    content_types: list[str]


def build_response_type_definitions(
    responses: dict[str, ResponseSpec],
    schema_generator: GoSchemaGenerator,
) -> list[ResponseTypeDefinition]:
    """Derive one Go type definition per decodable (response, content-type) pair.

    Responses and content types are visited in sorted order. Content entries
    without a schema, or whose content type belongs to no known family, do
    not produce a type definition.
    """
    definitions = []
    for response_name in sorted(responses):
        response = responses[response_name]
        for content_type_name in response.sorted_content_types():
            media = response.content[content_type_name]
            if "schema" not in media:
                logger.warning("Response %s (%s) declares no schema", response_name, content_type_name)
                continue

            family = classify_content_type(content_type_name)
            if not family.is_recognized:
                continue

            schema = schema_generator.generate(media["schema"], [response_name])
            type_name = f"{family.name}{to_camel_case(response_name)}"
            definitions.append(
                ResponseTypeDefinition(
                    type_name=type_name,
                    json_name=type_name,
                    schema=schema,
                    response_name=response_name,
                    content_type_name=content_type_name,
                )
            )
    return definitions


class OASParser:
    """Parser for OpenAPI 3.x specifications."""

    def __init__(self) -> None:
        self.spec_data: dict[str, Any] | None = None
        self.schemas: dict[str, Any] = {}
        self.schema_generator = GoSchemaGenerator()

    def parse_file(self, file_path: str | Path) -> ParsedSpec:
        """Parse OpenAPI specification from a JSON or YAML file."""
        path = Path(file_path)
        with path.open(encoding="utf-8") as f:
            if path.suffix.lower() in _YAML_SUFFIXES:
                self.spec_data = yaml.safe_load(f)
            else:
                self.spec_data = json.load(f)
        return self._parse_spec()

    def parse_dict(self, spec_dict: dict[str, Any]) -> ParsedSpec:
        """Parse OpenAPI specification from dictionary."""
        self.spec_data = spec_dict
        return self._parse_spec()

    def _parse_spec(self) -> ParsedSpec:
        """Parse the loaded specification."""
        if not self.spec_data:
            msg = "No specification data loaded"
            raise ValueError(msg)

        self.schemas = self.spec_data.get("components", {}).get("schemas", {})
        self.schema_generator = GoSchemaGenerator(self.schemas)

        operations = self._parse_operations()
        logger.debug("Parsed %d operations", len(operations))

        return ParsedSpec(
            info=self.spec_data.get("info", {}),
            operations=operations,
            schemas=self.schemas,
            content_types=self._extract_content_types(operations),
        )

    def _parse_operations(self) -> list[Operation]:
        """Parse all operations from paths."""
        operations: list[Operation] = []
        if not self.spec_data:
            return operations

        for path, path_item in self.spec_data.get("paths", {}).items():
            for method, operation_data in path_item.items():
                if method.lower() in _HTTP_METHODS:
                    operation = self._parse_operation(path, method.upper(), operation_data)
                    if operation:
                        operations.append(operation)

        return operations

    def _parse_operation(
        self,
        path: str,
        method: str,
        operation_data: dict[str, Any],
    ) -> Operation | None:
        """Parse a single operation."""
        operation_id = operation_data.get("operationId")
        if not operation_id:
            logger.debug("Skipping %s %s without operationId", method, path)
            return None

        responses = {}
        for response_name, response_data in operation_data.get("responses", {}).items():
            responses[str(response_name)] = self._parse_response(str(response_name), response_data)

        return Operation(
            operation_id=operation_id,
            method=method,
            path=path,
            summary=operation_data.get("summary"),
            description=operation_data.get("description"),
            responses=responses,
            extensions=self._extract_vendor_extensions(operation_data),
            response_type_definitions=build_response_type_definitions(responses, self.schema_generator),
            schema_generator=self.schema_generator,
        )

    def _resolve_reference(self, ref: str) -> dict[str, Any]:
        """Resolve a JSON reference."""
        if not self.spec_data:
            return {}

        resolved: Any = self.spec_data
        for part in ref.split("/")[1:]:  # Skip '#'
            if not isinstance(resolved, dict):
                return {}
            resolved = resolved.get(part)
        return resolved or {}

    def _parse_response(self, response_name: str, response_data: dict[str, Any]) -> ResponseSpec:
        """Parse a response, following a reference into components/responses."""
        if "$ref" in response_data:
            response_data = self._resolve_reference(response_data["$ref"])

        return ResponseSpec(
            response_name=response_name,
            description=response_data.get("description", ""),
            content=dict(response_data.get("content") or {}),
        )

    def _extract_vendor_extensions(self, data: dict[str, Any]) -> dict[str, Any]:
        """Extract vendor extensions from an OpenAPI object."""
        return {key: value for key, value in data.items() if key.startswith("x-")}

    def _extract_content_types(self, operations: list[Operation]) -> list[str]:
        """Extract all response content types used in the API."""
        content_types = set()
        for operation in operations:
            for response in operation.responses.values():
                content_types.update(response.content)
        return sorted(content_types)

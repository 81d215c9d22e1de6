"""
Go type declarations for OpenAPI schema nodes.

This module turns raw OpenAPI schema dictionaries into ``Schema`` descriptors
carrying the Go type declaration and the ordered list of object properties,
and defines the named type definitions the response decoder binds to.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

from go_oas_generator.errors import SchemaGenerationError
from go_oas_generator.utils.string_case import go_field_name, to_camel_case

# Go type used for payloads the generator cannot describe statically
OPEN_TYPE: Final = "interface{}"

# Type mapping constants for OpenAPI to Go conversion
_OPENAPI_TYPE_MAPPING: Final = {
    "string": {
        None: "string",
        "date": "string",
        "date-time": "time.Time",
        "byte": "[]byte",
        "binary": "[]byte",
    },
    "integer": {
        None: "int",
        "int32": "int32",
        "int64": "int64",
    },
    "number": {
        None: "float32",
        "float": "float32",
        "double": "float64",
    },
    "boolean": {
        None: "bool",
    },
}

_LOCAL_SCHEMA_REF_PREFIX: Final = "#/components/schemas/"


def _extract_ref_name(ref_string: str) -> str:
    """Extract the reference name from an OpenAPI $ref string.

    Args:
        ref_string: The $ref value (e.g., "#/components/schemas/Model").

    Returns:
        The extracted reference name (e.g., "Model").
    """
    return ref_string.split("/")[-1]


def _get_openapi_type_mapping(schema_type: str, schema_format: str | None) -> str | None:
    """Get Go type mapping for OpenAPI schema type and format.

    Args:
        schema_type: The OpenAPI schema type.
        schema_format: The OpenAPI schema format (optional).

    Returns:
        Go type string, or None when the schema type is unknown.
    """
    type_formats = _OPENAPI_TYPE_MAPPING.get(schema_type)
    if type_formats is None:
        return None
    return type_formats.get(schema_format, type_formats[None])


@dataclass(frozen=True)
class Property:
    """A named field of an object schema."""

    json_field_name: str
    schema: Schema
    required: bool = False
    nullable: bool = False
    description: str | None = None

    @property
    def go_name(self) -> str:
        return go_field_name(self.json_field_name)

    def go_type_def(self) -> str:
        """Go type of the struct field, a pointer when optional or nullable."""
        type_def = self.schema.type_decl
        if not self.schema.skip_optional_pointer and (not self.required or self.nullable):
            type_def = f"*{type_def}"
        return type_def

    @property
    def struct_tag(self) -> str:
        omit = "" if self.required else ",omitempty"
        return f'`json:"{self.json_field_name}{omit}"`'


@dataclass(frozen=True)
class Schema:
    """Go view of an OpenAPI schema node."""

    go_type: str
    properties: tuple[Property, ...] = ()
    ref_type: str | None = None
    path: tuple[str, ...] = ()
    # Raw (dereferenced) schema this view was generated from; never mutated
    oapi_schema: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def type_decl(self) -> str:
        return self.ref_type or self.go_type

    @property
    def is_object(self) -> bool:
        return bool(self.properties)

    @property
    def property_count(self) -> int:
        return len(self.properties)

    @property
    def skip_optional_pointer(self) -> bool:
        return self.type_decl == OPEN_TYPE

    def get_property(self, json_field_name: str) -> Property | None:
        return next((prop for prop in self.properties if prop.json_field_name == json_field_name), None)


@dataclass(frozen=True)
class TypeDefinition:
    """A named, generated Go type bound to a schema."""

    type_name: str
    json_name: str
    schema: Schema


@dataclass(frozen=True, kw_only=True)
class ResponseTypeDefinition(TypeDefinition):
    """A type definition derived from one (response, content-type) pair."""

    response_name: str
    content_type_name: str

    @property
    def type_definition(self) -> TypeDefinition:
        return TypeDefinition(type_name=self.type_name, json_name=self.json_name, schema=self.schema)


def _struct_decl(properties: Sequence[Property]) -> str:
    fields = [f"\t{prop.go_name} {prop.go_type_def()} {prop.struct_tag}" for prop in properties]
    return "struct {\n" + "\n".join(fields) + "\n}"


class GoSchemaGenerator:
    """Generates ``Schema`` descriptors for raw OpenAPI schema nodes.

    Top-level ``$ref`` nodes are dereferenced against ``components`` so their
    properties are visible; nested references only contribute their type name.
    """

    def __init__(self, components: Mapping[str, Any] | None = None) -> None:
        self.components: Mapping[str, Any] = components or {}

    def generate(self, schema: Any, path: Sequence[str] = ()) -> Schema:  # noqa: ANN401
        """Generate the Go view of ``schema``.

        Args:
            schema: Raw OpenAPI schema object.
            path: Location of the schema, used in error messages.

        Returns:
            The generated schema descriptor.

        Raises:
            SchemaGenerationError: If the node is not a schema object, uses an
                unknown type, or references a missing component.
        """
        return self._generate(schema, tuple(path), resolve_refs=True)

    def _generate(self, schema: Any, path: tuple[str, ...], *, resolve_refs: bool) -> Schema:  # noqa: ANN401
        if not isinstance(schema, Mapping):
            msg = f"Expected a schema object, got {type(schema).__name__}"
            raise SchemaGenerationError(msg, path)

        if "$ref" in schema:
            return self._generate_reference(schema["$ref"], path, resolve_refs=resolve_refs)

        if "anyOf" in schema or "oneOf" in schema:
            return Schema(go_type=OPEN_TYPE, path=path, oapi_schema=schema)

        if "allOf" in schema:
            return self._generate_all_of(schema, path)

        schema_type = schema.get("type")

        if schema_type == "array":
            items = self._generate(schema.get("items", {}), (*path, "items"), resolve_refs=False)
            return Schema(go_type=f"[]{items.type_decl}", path=path, oapi_schema=schema)

        if schema_type == "object" or "properties" in schema:
            return self._generate_object(schema, path)

        if schema_type is None:
            return Schema(go_type=OPEN_TYPE, path=path, oapi_schema=schema)

        go_type = _get_openapi_type_mapping(schema_type, schema.get("format")) if isinstance(schema_type, str) else None
        if go_type is None:
            msg = f"Unsupported schema type {schema_type!r}"
            raise SchemaGenerationError(msg, path)
        return Schema(go_type=go_type, path=path, oapi_schema=schema)

    def _generate_reference(self, ref: Any, path: tuple[str, ...], *, resolve_refs: bool) -> Schema:  # noqa: ANN401
        if not isinstance(ref, str):
            msg = f"Expected a string $ref, got {type(ref).__name__}"
            raise SchemaGenerationError(msg, path)

        ref_name = _extract_ref_name(ref)
        ref_type = to_camel_case(ref_name)

        if not resolve_refs or not ref.startswith(_LOCAL_SCHEMA_REF_PREFIX):
            return Schema(go_type=ref_type, ref_type=ref_type, path=path, oapi_schema={"$ref": ref})

        if ref_name not in self.components:
            msg = f"Unresolvable reference {ref!r}"
            raise SchemaGenerationError(msg, path)

        resolved = self.components[ref_name]
        target = self._generate(resolved, path, resolve_refs=False)
        return Schema(
            go_type=target.go_type,
            properties=target.properties,
            ref_type=ref_type,
            path=path,
            oapi_schema=resolved,
        )

    def _generate_all_of(self, schema: Mapping[str, Any], path: tuple[str, ...]) -> Schema:
        parts = schema["allOf"]
        if not isinstance(parts, list) or not parts:
            msg = "allOf must be a non-empty list"
            raise SchemaGenerationError(msg, path)

        generated = [self._generate(part, path, resolve_refs=True) for part in parts]
        if len(generated) == 1:
            return generated[0]

        merged: dict[str, Property] = {}
        for part in generated:
            for prop in part.properties:
                merged.setdefault(prop.json_field_name, prop)

        if not merged:
            return Schema(go_type=OPEN_TYPE, path=path, oapi_schema=schema)

        properties = tuple(merged.values())
        return Schema(go_type=_struct_decl(properties), properties=properties, path=path, oapi_schema=schema)

    def _generate_object(self, schema: Mapping[str, Any], path: tuple[str, ...]) -> Schema:
        properties_data = schema.get("properties") or {}
        if not isinstance(properties_data, Mapping):
            msg = "properties must be a mapping"
            raise SchemaGenerationError(msg, path)

        required_fields = set(schema.get("required", []))
        properties = []
        for prop_name, prop_data in properties_data.items():
            prop_schema = self._generate(prop_data, (*path, prop_name), resolve_refs=False)
            properties.append(
                Property(
                    json_field_name=prop_name,
                    schema=prop_schema,
                    required=prop_name in required_fields,
                    nullable=bool(prop_data.get("nullable", False)),
                    description=prop_data.get("description"),
                )
            )

        if properties:
            return Schema(
                go_type=_struct_decl(properties),
                properties=tuple(properties),
                path=path,
                oapi_schema=schema,
            )

        additional = schema.get("additionalProperties")
        value_type = OPEN_TYPE
        if isinstance(additional, Mapping) and additional:
            value_type = self._generate(additional, (*path, "additionalProperties"), resolve_refs=False).type_decl
        return Schema(go_type=f"map[string]{value_type}", path=path, oapi_schema=schema)

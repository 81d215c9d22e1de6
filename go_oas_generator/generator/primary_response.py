"""
Primary response resolution for the ``x-primary-response`` extension.

An operation may name one (status code, content type) response as its main
payload and list the properties of that payload that are only metadata::

    x-primary-response:
      status-code: "200"
      content-type: application/json
      metadata-properties: [ok]

When exactly one property is left once metadata is excluded, the generated
return type is flattened to that property's type. Otherwise the envelope is
kept and the metadata properties are stripped from a copy of its schema.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from go_oas_generator.errors import PrimaryResponseError, SchemaGenerationError, SchemaReductionError
from go_oas_generator.generator.filters import gen_response_type_name
from go_oas_generator.parser.go_schema import GoSchemaGenerator, Property, ResponseTypeDefinition, TypeDefinition

if TYPE_CHECKING:
    from go_oas_generator.parser.oas_parser import Operation

PRIMARY_RESPONSE_EXTENSION: Final = "x-primary-response"

STATUS_CODE_KEY: Final = "status-code"
CONTENT_TYPE_KEY: Final = "content-type"
METADATA_PROPERTIES_KEY: Final = "metadata-properties"


def _directive_error(operation_id: str, field: str, message: str) -> PrimaryResponseError:
    return PrimaryResponseError(message, operation_id=operation_id, field=field)


def _require_string(value: Any, *, operation_id: str, field: str) -> str:  # noqa: ANN401
    if not isinstance(value, str):
        msg = f"expected string for {field} in {PRIMARY_RESPONSE_EXTENSION}, got {type(value).__name__}"
        raise _directive_error(operation_id, field, msg)
    return value


def _decode_directive(raw: Any, operation_id: str) -> Mapping[str, Any]:  # noqa: ANN401
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            msg = f"invalid JSON: {e}"
            raise _directive_error(operation_id, PRIMARY_RESPONSE_EXTENSION, msg) from e

    if not isinstance(raw, Mapping):
        msg = f"expected an object, got {type(raw).__name__}"
        raise _directive_error(operation_id, PRIMARY_RESPONSE_EXTENSION, msg)
    return raw


@dataclass(frozen=True)
class PrimaryResponseInfo:
    """Parsed ``x-primary-response`` directive."""

    status_code: str
    content_type: str
    metadata_properties: tuple[str, ...] = ()

    def is_metadata(self, json_field_name: str) -> bool:
        return json_field_name in self.metadata_properties

    @classmethod
    def from_extension(cls, raw: Any, *, operation_id: str) -> PrimaryResponseInfo:  # noqa: ANN401
        """Parse the directive value found on an operation.

        Args:
            raw: The extension value, either a mapping or raw JSON text.
            operation_id: Operation the directive belongs to, for error reports.

        Raises:
            PrimaryResponseError: If a required key is missing or any value
                has the wrong type.
        """
        directive = _decode_directive(raw, operation_id)

        values = {}
        for key in (STATUS_CODE_KEY, CONTENT_TYPE_KEY):
            if key not in directive:
                msg = f"no {key} key in {PRIMARY_RESPONSE_EXTENSION}"
                raise _directive_error(operation_id, key, msg)
            values[key] = _require_string(directive[key], operation_id=operation_id, field=key)

        metadata_properties: list[str] = []
        if METADATA_PROPERTIES_KEY in directive:
            props = directive[METADATA_PROPERTIES_KEY]
            if not isinstance(props, list):
                msg = (
                    f"expected list for {METADATA_PROPERTIES_KEY} in {PRIMARY_RESPONSE_EXTENSION}, "
                    f"got {type(props).__name__}"
                )
                raise _directive_error(operation_id, METADATA_PROPERTIES_KEY, msg)
            for i, prop in enumerate(props):
                metadata_properties.append(
                    _require_string(prop, operation_id=operation_id, field=f"{METADATA_PROPERTIES_KEY}[{i}]")
                )

        return cls(
            status_code=values[STATUS_CODE_KEY],
            content_type=values[CONTENT_TYPE_KEY],
            metadata_properties=tuple(metadata_properties),
        )


def get_primary_response_info(operation: Operation) -> PrimaryResponseInfo | None:
    """Get the x-primary-response directive of an operation, or None if it has none."""
    if PRIMARY_RESPONSE_EXTENSION not in operation.extensions:
        return None
    return PrimaryResponseInfo.from_extension(
        operation.extensions[PRIMARY_RESPONSE_EXTENSION],
        operation_id=operation.operation_id,
    )


def _match_type_definition(operation: Operation, info: PrimaryResponseInfo) -> ResponseTypeDefinition:
    for td in operation.response_type_definitions:
        if td.response_name == info.status_code and td.content_type_name == info.content_type:
            return td

    declared = {td.response_name for td in operation.response_type_definitions}
    field = CONTENT_TYPE_KEY if info.status_code in declared else STATUS_CODE_KEY
    msg = f"no match found for primary response {info.status_code} {info.content_type}"
    raise _directive_error(operation.operation_id, field, msg)


def get_primary_response_type_definition(operation: Operation) -> ResponseTypeDefinition | None:
    """Return the response type definition named by the operation's directive.

    Returns None when the operation has no directive.

    Raises:
        PrimaryResponseError: If the directive is malformed or names a
            response the operation does not declare.
    """
    info = get_primary_response_info(operation)
    if info is None:
        return None
    return _match_type_definition(operation, info)


def get_single_non_metadata_property(td: TypeDefinition, info: PrimaryResponseInfo) -> Property | None:
    """Return the only property of ``td`` not marked as metadata, if there is exactly one."""
    candidates = [prop for prop in td.schema.properties if not info.is_metadata(prop.json_field_name)]
    if len(candidates) != 1:
        return None
    return candidates[0]


def is_flat_type_definition(td: TypeDefinition) -> bool:
    """Check if the type has no properties, meaning a flat type like integer or string."""
    return td.schema.property_count == 0


def as_reduced_type_definition(
    td: ResponseTypeDefinition,
    info: PrimaryResponseInfo,
    *,
    schema_generator: GoSchemaGenerator | None = None,
    operation_id: str = "",
) -> TypeDefinition:
    """Reduce a primary response type by its metadata properties.

    If a single non-metadata property remains, the result is that property's
    own type. Otherwise the result keeps the type name and is regenerated
    from a copy of the schema with the metadata properties removed.

    Raises:
        SchemaReductionError: If the reduced schema cannot be regenerated.
    """
    prop = get_single_non_metadata_property(td, info)
    if prop is not None:
        return TypeDefinition(type_name=prop.json_field_name, json_name=prop.json_field_name, schema=prop.schema)

    if not td.schema.is_object:
        return td.type_definition

    kept = [prop for prop in td.schema.properties if not info.is_metadata(prop.json_field_name)]
    reduced = {
        "type": "object",
        "properties": {prop.json_field_name: copy.deepcopy(dict(prop.schema.oapi_schema)) for prop in kept},
        "required": [prop.json_field_name for prop in kept if prop.required],
    }

    generator = schema_generator or GoSchemaGenerator()
    try:
        schema = generator.generate(reduced, td.schema.path)
    except SchemaGenerationError as e:
        raise SchemaReductionError(str(e), operation_id=operation_id, field=METADATA_PROPERTIES_KEY) from e

    return TypeDefinition(type_name=td.type_name, json_name=td.json_name, schema=schema)


def is_flat_type_definition_after_reduction(td: ResponseTypeDefinition, info: PrimaryResponseInfo) -> bool:
    """Check if the given type definition would be a flat type after reduction."""
    return is_flat_type_definition(as_reduced_type_definition(td, info))


@dataclass(frozen=True)
class ReturnType:
    """Resolved return type of an operation's generated client method."""

    type_name: str
    flattened: bool = False
    primary_response: PrimaryResponseInfo | None = None
    response_type_definition: ResponseTypeDefinition | None = None
    # Flattened property type, or the envelope with metadata stripped
    reduced_type_definition: TypeDefinition | None = None
    flattened_property: Property | None = None


def resolve_return_type(operation: Operation) -> ReturnType:
    """Resolve the return type of an operation from its primary response directive.

    Operations without a directive keep the ``*<OperationId>Response``
    envelope. With a directive, the return type is flattened to the single
    non-metadata property's type when there is exactly one.

    Raises:
        PrimaryResponseError: If the directive is malformed or unmatched.
        SchemaReductionError: If the metadata-stripped schema cannot be regenerated.
    """
    default_name = f"*{gen_response_type_name(operation.operation_id)}"
    info = get_primary_response_info(operation)
    if info is None:
        return ReturnType(type_name=default_name)

    td = _match_type_definition(operation, info)
    reduced = as_reduced_type_definition(
        td,
        info,
        schema_generator=operation.schema_generator,
        operation_id=operation.operation_id,
    )

    prop = get_single_non_metadata_property(td, info)
    if prop is None:
        return ReturnType(
            type_name=default_name,
            primary_response=info,
            response_type_definition=td,
            reduced_type_definition=reduced,
        )

    return ReturnType(
        type_name=prop.go_type_def(),
        flattened=True,
        primary_response=info,
        response_type_definition=td,
        reduced_type_definition=reduced,
        flattened_property=prop,
    )


def gen_return_type_name(operation: Operation) -> str:
    """Return the Go return type name, substituting the flat type when possible."""
    return resolve_return_type(operation).type_name

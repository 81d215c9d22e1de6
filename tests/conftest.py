"""Shared OpenAPI documents and operation builders for the generator tests."""

import copy
from collections.abc import Callable
from typing import Any

import pytest

from go_oas_generator.parser.oas_parser import OASParser, Operation, ParsedSpec

TEST_SPEC: dict[str, Any] = {
    "openapi": "3.0.1",
    "info": {"title": "Test API", "version": "1.0.0"},
    "paths": {
        "/test/{name}": {
            "get": {
                "operationId": "getTestByName",
                "summary": "Get test by name",
                "x-primary-response": {
                    "status-code": "200",
                    "content-type": "application/xml",
                    "metadata-properties": ["ok"],
                },
                "responses": {
                    "200": {
                        "description": "Success",
                        "content": {
                            "application/xml": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "ok": {"type": "boolean"},
                                        "tests": {
                                            "type": "array",
                                            "items": {"$ref": "#/components/schemas/Test"},
                                        },
                                    },
                                },
                            },
                        },
                    },
                    "default": {"description": "Error"},
                },
            },
        },
        "/cat": {
            "get": {
                "operationId": "getCatStatus",
                "description": "Reports whether the cat is alive.",
                "responses": {
                    "200": {
                        "description": "Success",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/CatAlive"}},
                            "application/xml": {"schema": {"$ref": "#/components/schemas/CatAlive"}},
                            "text/plain": {"schema": {"type": "string"}},
                        },
                    },
                    "default": {"$ref": "#/components/responses/ErrorResponse"},
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Test": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "cases": {"type": "array", "items": {"type": "string"}},
                },
            },
            "CatAlive": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "alive_since": {"type": "string", "format": "date-time"},
                },
            },
            "Error": {
                "type": "object",
                "required": ["code", "message"],
                "properties": {
                    "code": {"type": "integer", "format": "int32"},
                    "message": {"type": "string"},
                },
            },
        },
        "responses": {
            "ErrorResponse": {
                "description": "Unexpected error",
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}},
            },
        },
    },
}


def single_operation_spec(
    responses: dict[str, Any],
    extensions: dict[str, Any] | None = None,
    schemas: dict[str, Any] | None = None,
    operation_id: str = "op",
) -> dict[str, Any]:
    """Wrap raw responses into a one-operation OpenAPI document."""
    operation = {"operationId": operation_id, "responses": responses, **(extensions or {})}
    return {
        "openapi": "3.0.1",
        "info": {"title": "Single", "version": "1.0.0"},
        "paths": {"/op": {"get": operation}},
        "components": {"schemas": schemas or {}},
    }


@pytest.fixture
def spec_dict() -> dict[str, Any]:
    return copy.deepcopy(TEST_SPEC)


@pytest.fixture
def parsed_spec(spec_dict: dict[str, Any]) -> ParsedSpec:
    return OASParser().parse_dict(spec_dict)


@pytest.fixture
def operations_by_id(parsed_spec: ParsedSpec) -> dict[str, Operation]:
    return {op.operation_id: op for op in parsed_spec.operations}


@pytest.fixture
def build_operation() -> Callable[..., Operation]:
    """Build a parsed operation from raw responses and operation extensions."""

    def _build(
        responses: dict[str, Any],
        extensions: dict[str, Any] | None = None,
        schemas: dict[str, Any] | None = None,
    ) -> Operation:
        spec = OASParser().parse_dict(single_operation_spec(responses, extensions, schemas))
        return spec.operations[0]

    return _build

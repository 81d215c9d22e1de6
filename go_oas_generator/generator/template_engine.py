"""
Go Template Engine for OpenAPI Client Generation

This module uses Jinja2 templates to generate the Go response types and
response parsing functions of an API client from parsed OpenAPI
specifications.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from jinja2 import Environment, FileSystemLoader, select_autoescape

from go_oas_generator.errors import ConfigurationError
from go_oas_generator.generator.dispatch import assemble_dispatch, gen_response_unmarshal, synthesize_cases
from go_oas_generator.generator.filters import FILTERS, gen_response_payload, gen_response_type_name
from go_oas_generator.generator.primary_response import (
    as_reduced_type_definition,
    gen_return_type_name,
    get_primary_response_info,
    get_primary_response_type_definition,
    get_single_non_metadata_property,
    is_flat_type_definition,
    is_flat_type_definition_after_reduction,
    resolve_return_type,
)
from go_oas_generator.parser.oas_parser import Operation, ParsedSpec
from go_oas_generator.utils.string_case import (
    lowercase_first_character,
    sanitize_go_identity,
    to_camel_case,
    uppercase_first_character,
)

logger = logging.getLogger(__name__)

RESPONSES_FILE_NAME: Final = "client_responses.go"

# Imports every generated responses file needs
_BASE_IMPORTS: Final = ("io", "net/http")

# Go packages backing each decoding codec
_CODEC_IMPORTS: Final = {
    "json": "encoding/json",
    "xml": "encoding/xml",
    "yaml": "gopkg.in/yaml.v2",
}


class GoTemplateEngine:
    """Template engine for generating Go code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._register_filters()
        self._register_globals()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters for Go code generation."""
        builtin_filters = {
            "uc_first": uppercase_first_character,
            "lc_first": lowercase_first_character,
            "camel_case": to_camel_case,
            "sanitize_go_identity": sanitize_go_identity,
        }

        self.env.filters.update(builtin_filters)
        self.env.filters.update(FILTERS)

    def _register_globals(self) -> None:
        """Register global functions available in templates."""
        globals_map: dict[str, Any] = {
            # Response envelope and decoding
            "gen_response_payload": gen_response_payload,
            "gen_response_type_name": gen_response_type_name,
            "gen_response_unmarshal": gen_response_unmarshal,
            "get_response_type_definitions": lambda op: op.response_type_definitions,
            # Primary response resolution
            "get_primary_response_info": get_primary_response_info,
            "get_primary_response_type_definition": get_primary_response_type_definition,
            "get_single_non_metadata_property": get_single_non_metadata_property,
            "is_flat_type_definition": is_flat_type_definition,
            "as_reduced_type_definition": as_reduced_type_definition,
            "is_flat_type_definition_after_reduction": is_flat_type_definition_after_reduction,
            "gen_return_type_name": gen_return_type_name,
            "resolve_return_type": resolve_return_type,
        }

        self.env.globals.update(globals_map)

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


def collect_imports(operations: list[Operation]) -> list[str]:
    """Collect the Go imports needed by the response code of ``operations``.

    A file without operations needs no imports at all.
    """
    if not operations:
        return []
    imports = set(_BASE_IMPORTS)
    for operation in operations:
        sequence = assemble_dispatch(synthesize_cases(operation)) or []
        for clause in sequence:
            if clause.handled:
                imports.add("strings")
                imports.add(_CODEC_IMPORTS[clause.codec])
        if any("time.Time" in td.schema.type_decl for td in operation.response_type_definitions):
            imports.add("time")
    return sorted(imports)


class GoCodeGenerator:
    """Main code generator for Go response handling."""

    def __init__(self, template_engine: GoTemplateEngine | None = None) -> None:
        """Initialize the code generator."""
        self.template_engine = template_engine or GoTemplateEngine()
        self.skipped_operations: list[str] = []

    def generate_client(
        self,
        spec: ParsedSpec,
        output_dir: Path,
        package_name: str = "client",
        *,
        continue_on_error: bool = False,
    ) -> dict[Path, str]:
        """Generate the Go response handling file from an OpenAPI spec.

        Args:
            spec: The parsed OpenAPI specification.
            output_dir: Directory the generated files belong in.
            package_name: Go package name of the generated file.
            continue_on_error: Skip operations with configuration errors
                instead of aborting the whole run.

        Returns:
            Mapping of output paths to generated file content.

        Raises:
            ConfigurationError: If an operation's directives are invalid and
                ``continue_on_error`` is not set.
        """
        output_dir = Path(output_dir)
        self.skipped_operations = []
        context = {
            "spec": spec,
            "package_name": package_name,
        }

        blocks = []
        rendered_operations = []
        for operation in sorted(spec.operations, key=lambda op: op.operation_id):
            try:
                blocks.append(self._render_operation(operation, context))
            except ConfigurationError as e:
                if not continue_on_error:
                    raise
                logger.error("Skipping operation %s: %s", operation.operation_id, e)  # noqa: TRY400
                self.skipped_operations.append(operation.operation_id)
                continue
            rendered_operations.append(operation)

        file_context = {
            **context,
            "imports": collect_imports(rendered_operations),
            "operation_blocks": blocks,
        }
        return {
            output_dir / RESPONSES_FILE_NAME: self.template_engine.render_template(
                "client_responses.go.j2",
                file_context,
            ),
        }

    def _render_operation(self, operation: Operation, context: dict[str, Any]) -> str:
        """Render the response type and parse function of one operation."""
        operation_context = {
            **context,
            "operation": operation,
            "return_type": resolve_return_type(operation),
        }
        return self.template_engine.render_template("operation_response.go.j2", operation_context)

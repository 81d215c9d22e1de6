"""
Response dispatch synthesis for generated Go clients.

For every declared (response, content-type) pair of an operation this module
builds a ``CaseClause``: the runtime condition on the HTTP status code and
``Content-Type`` header, and the Go statements decoding the body. The
clauses are then ordered so that exact status codes are tested before status
classes, and status classes before the ``default`` catch-all, whatever order
the API description declares them in.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Final

from go_oas_generator.content_types import ContentTypeFamily, classify_content_type
from go_oas_generator.errors import ContentTypeConflictError, DuplicateCaseError
from go_oas_generator.parser.go_schema import OPEN_TYPE, ResponseTypeDefinition

if TYPE_CHECKING:
    from go_oas_generator.parser.oas_parser import Operation

logger = logging.getLogger(__name__)

STATUS_CODE_VAR: Final = "rsp.StatusCode"
CONTENT_TYPE_HEADER_EXPR: Final = 'rsp.Header.Get("Content-Type")'
DEFAULT_RESPONSE_NAME: Final = "default"

_STATUS_CLASS_PATTERN: Final = re.compile(r"^[1-5]XX$")

_DECODE_ACTION: Final = (
    "var dest {type_decl}\n"
    "if err := {codec}.Unmarshal(bodyBytes, &dest); err != nil {{\n"
    " return nil, err\n"
    "}}\n"
    "response.{field_name} = &dest"
)
_NO_CONTENT_ACTION: Final = "break // No content-type"
_UNSUPPORTED_ACTION: Final = "// Content-type ({content_type}) unsupported"


class Specificity(IntEnum):
    """Ordering tier of a case clause; lower tiers are tested first at runtime."""

    MOST_SPECIFIC = 3
    LESS_SPECIFIC = 6
    LEAST_SPECIFIC = 9


def is_status_class(response_name: str) -> bool:
    """Check if a response name is a status-code class such as ``4XX``."""
    return _STATUS_CLASS_PATTERN.match(response_name) is not None


def specificity_for_response(response_name: str, *, handled: bool = True) -> Specificity:
    """Assign the ordering tier for a response name.

    Unhandled cases (no content, unsupported content type) and the
    ``default`` response are always least specific.

    Examples:
        >>> specificity_for_response("200")
        <Specificity.MOST_SPECIFIC: 3>
        >>> specificity_for_response("4XX")
        <Specificity.LESS_SPECIFIC: 6>
        >>> specificity_for_response("200", handled=False)
        <Specificity.LEAST_SPECIFIC: 9>
    """
    if not handled or response_name == DEFAULT_RESPONSE_NAME:
        return Specificity.LEAST_SPECIFIC
    if is_status_class(response_name):
        return Specificity.LESS_SPECIFIC
    return Specificity.MOST_SPECIFIC


def condition_of_response_name(status_code_var: str, response_name: str) -> str:
    """Return the Go status-code comparison for a response name.

    Examples:
        >>> condition_of_response_name("rsp.StatusCode", "default")
        'true'
        >>> condition_of_response_name("rsp.StatusCode", "4XX")
        'rsp.StatusCode / 100 == 4'
        >>> condition_of_response_name("rsp.StatusCode", "201")
        'rsp.StatusCode == 201'
    """
    if response_name == DEFAULT_RESPONSE_NAME:
        return "true"
    if is_status_class(response_name):
        return f"{status_code_var} / 100 == {response_name[0]}"
    return f"{status_code_var} == {response_name}"


@dataclass(frozen=True)
class CaseClause:
    """One ``case`` of the generated response ``switch``."""

    response_name: str
    content_type: str
    specificity: Specificity
    condition: str
    action: str
    handled: bool
    # Go package decoding the body; empty for unhandled cases
    codec: str = ""

    @property
    def sort_key(self) -> tuple[Specificity, str, str]:
        return (self.specificity, self.content_type, self.response_name)

    @property
    def order_key(self) -> tuple[Specificity, Specificity, str, str]:
        """Emission order; unhandled cases still test exact codes before classes before ``default``."""
        return (self.specificity, specificity_for_response(self.response_name), self.content_type, self.response_name)

    def render(self) -> str:
        return f"case {self.condition}:\n{self.action}\n"


def build_unmarshal_case(
    type_definition: ResponseTypeDefinition,
    family: ContentTypeFamily,
    status_code_var: str = STATUS_CODE_VAR,
) -> CaseClause:
    """Build the handled case decoding a body into ``type_definition``."""
    response_name = type_definition.response_name
    status_condition = condition_of_response_name(status_code_var, response_name)
    return CaseClause(
        response_name=response_name,
        content_type=type_definition.content_type_name,
        specificity=specificity_for_response(response_name),
        condition=f'strings.Contains({CONTENT_TYPE_HEADER_EXPR}, "{family.codec}") && {status_condition}',
        action=_DECODE_ACTION.format(
            type_decl=type_definition.schema.type_decl,
            codec=family.codec,
            field_name=type_definition.type_name,
        ),
        handled=True,
        codec=family.codec,
    )


def _build_unhandled_case(response_name: str, content_type: str, action: str, status_code_var: str) -> CaseClause:
    return CaseClause(
        response_name=response_name,
        content_type=content_type,
        specificity=specificity_for_response(response_name, handled=False),
        condition=condition_of_response_name(status_code_var, response_name),
        action=action,
        handled=False,
    )


def _check_field_conflicts(operation: Operation) -> None:
    seen: dict[str, ResponseTypeDefinition] = {}
    for td in operation.response_type_definitions:
        other = seen.setdefault(td.type_name, td)
        if other is not td:
            msg = (
                f"content types {other.content_type_name} and {td.content_type_name} "
                f"both decode into {td.type_name}"
            )
            raise ContentTypeConflictError(
                msg,
                operation_id=operation.operation_id,
                field=f"responses.{td.response_name}.content",
            )


def synthesize_cases(operation: Operation, status_code_var: str = STATUS_CODE_VAR) -> list[CaseClause]:
    """Produce the case clauses for every declared response of an operation.

    Responses without content yield a no-op case and unrecognized content
    types yield a stub case. Payloads typed as ``interface{}`` (``anyOf`` /
    ``oneOf``) yield nothing and are left for the caller to decode.

    Raises:
        ContentTypeConflictError: If two content types of one response
            belong to the same family and so decode into the same field.
    """
    _check_field_conflicts(operation)
    definitions = {(td.response_name, td.content_type_name): td for td in operation.response_type_definitions}
    cases = []

    for response_name in operation.sorted_response_names():
        response = operation.responses[response_name]

        if not response.has_content:
            cases.append(_build_unhandled_case(response_name, "", _NO_CONTENT_ACTION, status_code_var))
            continue

        for content_type in response.sorted_content_types():
            family = classify_content_type(content_type)
            if not family.is_recognized:
                logger.debug(
                    "%s: content type %s of response %s unsupported",
                    operation.operation_id,
                    content_type,
                    response_name,
                )
                action = _UNSUPPORTED_ACTION.format(content_type=content_type)
                cases.append(_build_unhandled_case(response_name, content_type, action, status_code_var))
                continue

            type_definition = definitions.get((response_name, content_type))
            if type_definition is None:
                continue

            if type_definition.schema.type_decl == OPEN_TYPE:
                logger.debug(
                    "%s: %s %s payload is untyped, skipping",
                    operation.operation_id,
                    response_name,
                    content_type,
                )
                continue

            cases.append(build_unmarshal_case(type_definition, family, status_code_var))

    return cases


def assemble_dispatch(cases: Iterable[CaseClause]) -> list[CaseClause] | None:
    """Order case clauses into the emitted dispatch sequence.

    Handled cases come first, then unhandled ones. Each group is sorted by
    tier, then status specificity, content type and response name.

    Returns:
        The ordered clauses, or None when there is nothing to dispatch on.

    Raises:
        DuplicateCaseError: If two clauses share a sort key, or two handled
            clauses share a runtime condition.
    """
    handled: dict[tuple[Specificity, str, str], CaseClause] = {}
    unhandled: dict[tuple[Specificity, str, str], CaseClause] = {}
    handled_conditions: set[str] = set()

    for clause in cases:
        if clause.sort_key in handled or clause.sort_key in unhandled:
            raise DuplicateCaseError(clause.sort_key)
        if clause.handled:
            # A second handled case on the same condition could never run
            if clause.condition in handled_conditions:
                raise DuplicateCaseError(clause.sort_key)
            handled_conditions.add(clause.condition)
        group = handled if clause.handled else unhandled
        group[clause.sort_key] = clause

    if not handled and not unhandled:
        return None

    return [
        clause
        for group in (handled, unhandled)
        for clause in sorted(group.values(), key=lambda c: c.order_key)
    ]


def gen_response_unmarshal(operation: Operation) -> str:
    """Generate the Go ``switch`` decoding an operation's response body.

    Returns an empty string when the operation has no decodable responses.
    """
    sequence = assemble_dispatch(synthesize_cases(operation))
    if sequence is None:
        return ""

    body = "".join(f"{clause.render()}\n" for clause in sequence)
    return f"switch {{\n{body}}}\n"

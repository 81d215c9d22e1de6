"""
Exceptions raised while turning an OpenAPI description into Go code.

Configuration errors always name the offending operation and directive
field so that a failed generation run points straight at the part of the
API description that needs fixing.
"""

from collections.abc import Sequence


class GeneratorError(Exception):
    """Base class for all generator failures."""


class SchemaGenerationError(GeneratorError):
    """A schema node could not be turned into a Go type declaration."""

    def __init__(self, message: str, path: Sequence[str] = ()) -> None:
        self.path = tuple(path)
        location = ".".join(self.path) or "<root>"
        super().__init__(f"{message} (at {location})")


class ConfigurationError(GeneratorError):
    """The API description is inconsistent with what the generator expects."""

    def __init__(self, message: str, *, operation_id: str, field: str) -> None:
        self.operation_id = operation_id
        self.field = field
        super().__init__(f"operation '{operation_id}': {message} [{field}]")


class PrimaryResponseError(ConfigurationError):
    """The x-primary-response directive is malformed or names an undeclared response."""


class SchemaReductionError(ConfigurationError):
    """Regenerating the metadata-stripped primary response schema failed."""


class DuplicateCaseError(GeneratorError):
    """Two case clauses compete for the same slot in one dispatch sequence."""

    def __init__(self, sort_key: tuple[object, ...]) -> None:
        self.sort_key = sort_key
        super().__init__(f"duplicate case clause for sort key {sort_key!r}")


class ContentTypeConflictError(ConfigurationError):
    """Two content types of one response decode into the same response field."""

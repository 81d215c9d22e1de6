"""
Content-type families understood by the Go response decoder.

Each family maps to the Go codec package that decodes it. Membership is an
exact, case-sensitive match against fixed tables; anything else is
``UNRECOGNIZED`` and is handled by the caller as an unsupported payload.
"""

from enum import Enum
from typing import Final

CONTENT_TYPES_JSON: Final = ("application/json", "text/x-json")
CONTENT_TYPES_YAML: Final = ("application/yaml", "application/x-yaml", "text/yaml", "text/x-yaml")
CONTENT_TYPES_XML: Final = ("application/xml", "text/xml")


class ContentTypeFamily(Enum):
    """Decoding strategy shared by a group of MIME content types."""

    JSON = "json"
    YAML = "yaml"
    XML = "xml"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_recognized(self) -> bool:
        return self is not ContentTypeFamily.UNRECOGNIZED

    @property
    def codec(self) -> str:
        """Go package performing the decode, also the header substring matched at runtime."""
        if not self.is_recognized:
            msg = "Unrecognized content types have no codec"
            raise ValueError(msg)
        return self.value


_FAMILY_BY_CONTENT_TYPE: Final = {
    **dict.fromkeys(CONTENT_TYPES_JSON, ContentTypeFamily.JSON),
    **dict.fromkeys(CONTENT_TYPES_YAML, ContentTypeFamily.YAML),
    **dict.fromkeys(CONTENT_TYPES_XML, ContentTypeFamily.XML),
}


def classify_content_type(content_type: str) -> ContentTypeFamily:
    """Map a wire content-type string to its decoding family.

    Examples:
        >>> classify_content_type("text/x-json")
        <ContentTypeFamily.JSON: 'json'>
        >>> classify_content_type("application/octet-stream")
        <ContentTypeFamily.UNRECOGNIZED: 'unrecognized'>
    """
    return _FAMILY_BY_CONTENT_TYPE.get(content_type, ContentTypeFamily.UNRECOGNIZED)

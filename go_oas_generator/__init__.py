"""
Go OpenAPI Client Generator

A Jinja2-based generator that produces the response decoding layer of Go
API clients from OpenAPI specifications.
"""

from .generator import GoCodeGenerator, GoTemplateEngine
from .parser import OASParser, ParsedSpec

__version__ = "1.0.0"
__author__ = "OpenAPI Go Generator"

__all__ = [
    "GoCodeGenerator",
    "GoTemplateEngine",
    "OASParser",
    "ParsedSpec",
]

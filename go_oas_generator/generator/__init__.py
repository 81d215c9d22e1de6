"""
Go Code Generator Module

This module provides response dispatch synthesis, primary response
resolution and Jinja2-based code generation for Go API clients.
"""

from .dispatch import CaseClause, Specificity, assemble_dispatch, gen_response_unmarshal, synthesize_cases
from .primary_response import PrimaryResponseInfo, ReturnType, get_primary_response_info, resolve_return_type
from .template_engine import GoCodeGenerator, GoTemplateEngine

__all__ = [
    "CaseClause",
    "GoCodeGenerator",
    "GoTemplateEngine",
    "PrimaryResponseInfo",
    "ReturnType",
    "Specificity",
    "assemble_dispatch",
    "gen_response_unmarshal",
    "get_primary_response_info",
    "resolve_return_type",
    "synthesize_cases",
]
